"""
Tests for depth-first tree traversal.
"""

from mpx2vue.template import Node, TreeTraverser, traverse, walk


def _label(node):
    return node.name if node.is_element else f"#{node.type.value}"


class TestTraverse:

    def test_enter_exit_order(self, parse):
        tree = parse("<a><b></b>t</a><c/>").tree
        events = []

        traverse(
            tree,
            enter=lambda node, parent: events.append(("enter", _label(node))),
            exit=lambda node, parent: events.append(("exit", _label(node))),
        )

        assert events == [
            ("enter", "a"),
            ("enter", "b"),
            ("exit", "b"),
            ("enter", "#text"),
            ("exit", "#text"),
            ("exit", "a"),
            ("enter", "c"),
            ("exit", "c"),
        ]

    def test_parent_is_passed(self, parse):
        tree = parse("<a><b></b></a>").tree
        parents = {}

        traverse(tree, enter=lambda node, parent: parents.setdefault(node.name, parent))

        assert parents["a"] is None
        assert parents["b"] is tree[0]

    def test_callbacks_are_optional(self, parse):
        tree = parse("<a><b></b></a>").tree
        exits = []

        traverse(tree)
        TreeTraverser().traverse(tree, exit=lambda node, parent: exits.append(node.name))

        assert exits == ["b", "a"]

    def test_callback_results_are_ignored(self, parse):
        tree = parse("<a><b></b></a><c></c>").tree
        seen = []

        def enter(node, parent):
            seen.append(node.name)
            return False

        traverse(tree, enter=enter)
        assert seen == ["a", "b", "c"]

    def test_deep_tree_without_recursion(self):
        node = Node.element("x")
        for _ in range(4999):
            node = Node.element("x", children=[node])
        count = []

        traverse([node], enter=lambda n, p: count.append(1))

        assert len(count) == 5000


class TestWalk:

    def test_preorder_pairs(self, parse):
        tree = parse("<a><b>t</b></a>").tree
        pairs = [(_label(n), _label(p) if p else None) for n, p in walk(tree)]
        assert pairs == [("a", None), ("b", "a"), ("#text", "b")]

    def test_early_termination(self, parse):
        tree = parse("<a><b></b></a><b></b>").tree
        first_b = next(node for node, _ in walk(tree) if node.name == "b")
        assert first_b is tree[0].children[0]
