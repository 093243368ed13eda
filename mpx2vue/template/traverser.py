"""
Обход дерева шаблона в глубину.

Для каждого узла вызывается enter(node, parent) до обхода детей
и exit(node, parent) после. Обход выполняется по явному стеку,
поэтому глубина вложенности не ограничена стеком вызовов Python.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

from .nodes import Node, TemplateTree

VisitorCallback = Callable[[Node, Optional[Node]], None]


class TreeTraverser:
    """
    Обходчик дерева с колбэками входа и выхода.

    Возвращаемые колбэками значения игнорируются, прервать обход нельзя.
    Узлы не изменяются, так что несколько обходов одного дерева безопасны.
    """

    def traverse(
        self,
        tree: TemplateTree,
        enter: Optional[VisitorCallback] = None,
        exit: Optional[VisitorCallback] = None,
    ) -> None:
        # (узел, родитель, выход из узла)
        stack: List[Tuple[Node, Optional[Node], bool]] = [
            (node, None, False) for node in reversed(tree)
        ]

        while stack:
            node, parent, leaving = stack.pop()

            if leaving:
                if exit is not None:
                    exit(node, parent)
                continue

            if enter is not None:
                enter(node, parent)

            stack.append((node, parent, True))
            for child in reversed(node.children):
                stack.append((child, node, False))


def traverse(
    tree: TemplateTree,
    enter: Optional[VisitorCallback] = None,
    exit: Optional[VisitorCallback] = None,
) -> None:
    """Обходит дерево, вызывая enter/exit для каждого узла."""
    TreeTraverser().traverse(tree, enter=enter, exit=exit)


def walk(tree: TemplateTree) -> Iterator[Tuple[Node, Optional[Node]]]:
    """
    Итерирует пары (узел, родитель) в прямом порядке.

    Для поиска с ранним выходом достаточно прекратить итерацию.
    """
    stack: List[Tuple[Node, Optional[Node]]] = [(node, None) for node in reversed(tree)]
    while stack:
        node, parent = stack.pop()
        yield node, parent
        for child in reversed(node.children):
            stack.append((child, node))


__all__ = ["VisitorCallback", "TreeTraverser", "traverse", "walk"]
