"""
Разметка элементов шаблона ref-идентификаторами и обратная сериализация.

Каждый элемент получает атрибут вида wx:ref="devtools_<путь>_<тег>",
где путь строится по позициям элементов в дереве ("1", "1-2", "1-2-1").
По ref-идентификатору инструменты разработчика находят узел в исходнике.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .converter import format_attribute
from .mappings import is_directive_name
from .nodes import Attribute, AttributeBag, Directive, Node, NodeType, TemplateTree
from .traverser import traverse

logger = logging.getLogger(__name__)

REF_ATTRIBUTE = "wx:ref"
REF_PREFIX = "devtools"


@dataclass
class _ElementCopy:
    """Копия элемента, его путь и число уже пронумерованных дочерних элементов."""
    node: Node
    path: str
    element_count: int = 0


def annotate(
    tree: TemplateTree,
    *,
    attribute: str = REF_ATTRIBUTE,
    prefix: str = REF_PREFIX,
) -> TemplateTree:
    """
    Возвращает копию дерева, где у каждого элемента есть ref-атрибут.

    Все элементы верхнего уровня получают путь "1"; дочерние элементы
    нумеруются с 1 среди элементов-братьев (текст и комментарии не считаются).
    Копия глубокая: узлы, атрибуты и списки модификаторов не разделяются
    с исходным деревом, которое не изменяется.

    Args:
        tree: Дерево шаблона
        attribute: Имя ref-атрибута
        prefix: Префикс значения

    Returns:
        Новое дерево
    """
    annotated: TemplateTree = []
    # id(исходного элемента) -> его копия
    copies: Dict[int, _ElementCopy] = {}

    def enter(node: Node, parent: Optional[Node]) -> None:
        parent_copy = copies[id(parent)] if parent is not None else None
        siblings = parent_copy.node.children if parent_copy is not None else annotated

        if not node.is_element:
            siblings.append(copy.deepcopy(node))
            return

        if parent_copy is None:
            path = "1"
        else:
            parent_copy.element_count += 1
            path = f"{parent_copy.path}-{parent_copy.element_count}"

        ref_value = f"{prefix}_{path}_{node.name}"
        attributes = _with_ref(copy.deepcopy(node.attributes.all), attribute, ref_value)
        element = Node(
            type=NodeType.ELEMENT,
            name=node.name,
            attributes=AttributeBag(attributes),
            children=[],
            self_closing=node.self_closing,
            span=node.span,
        )
        siblings.append(element)
        copies[id(node)] = _ElementCopy(element, path)

    traverse(tree, enter=enter)
    return annotated


def _with_ref(attributes: List[Attribute], name: str, value: str) -> List[Attribute]:
    """Заменяет (или добавляет в конец) единственный атрибут name."""
    if is_directive_name(name):
        ref = Attribute(name, value, is_directive=True, directive=Directive(name, value))
    else:
        ref = Attribute(name, value)

    result: List[Attribute] = []
    placed = False
    for attr in attributes:
        if attr.name != name:
            result.append(attr)
        elif not placed:
            result.append(ref)
            placed = True

    if not placed:
        result.append(ref)
    return result


class _MarkupWriter:
    """
    Сериализатор дерева в разметку исходного диалекта.

    Как и конвертер, работает через TreeTraverser и не ограничен
    стеком вызовов по глубине дерева.
    """

    def __init__(self, indent_size: int):
        self.indent_size = indent_size
        self._lines: List[str] = []
        self._level = 0

    def write(self, tree: TemplateTree) -> str:
        self._lines = []
        self._level = 0
        traverse(tree, enter=self._on_enter, exit=self._on_exit)
        return "\n".join(self._lines)

    def _on_enter(self, node: Node, parent: Optional[Node]) -> None:
        # Текст внутри "строчного" элемента уже записан вместе с ним
        if parent is not None and _is_inline(parent):
            return

        if node.is_text:
            content = node.content.strip()
            if content:
                self._write_line(content)
            return

        if node.is_comment:
            self._write_line(f"<!--{node.content}-->")
            return

        attributes = " ".join(_attribute_to_text(a) for a in node.attributes.all)
        head = f"<{node.name} {attributes}" if attributes else f"<{node.name}"

        if not node.children:
            if node.self_closing:
                self._write_line(head + " />")
            else:
                self._write_line(f"{head}></{node.name}>")
        elif _is_inline(node):
            inner = "".join(child.content.strip() for child in node.children)
            self._write_line(f"{head}>{inner}</{node.name}>")
        else:
            self._write_line(head + ">")
            self._level += 1

    def _on_exit(self, node: Node, parent: Optional[Node]) -> None:
        if node.is_element and node.children and not _is_inline(node):
            self._level -= 1
            self._write_line(f"</{node.name}>")

    def _write_line(self, content: str) -> None:
        self._lines.append(" " * (self._level * self.indent_size) + content)


def _is_inline(node: Node) -> bool:
    """Элемент, все дети которого - текст, пишется в одну строку."""
    return node.is_element and bool(node.children) and all(child.is_text for child in node.children)


def tree_to_text(tree: TemplateTree, *, indent_size: int = 2) -> str:
    """
    Сериализует дерево обратно в разметку исходного диалекта.

    Атрибуты выводятся в исходном порядке. Элемент, записанный
    как <x/>, выводится как <x />, пустой <x></x> - как <x></x>.
    Элемент только с текстом пишется в одну строку, остальные
    элементы с детьми - блоком с отступами.
    """
    return _MarkupWriter(indent_size).write(tree)


def _attribute_to_text(attr: Attribute) -> str:
    # Атрибут без значения (wx:else, disabled) пишется одним именем
    if not attr.value:
        return attr.name
    return format_attribute(attr.name, attr.value)


def annotate_to_text(
    tree: TemplateTree,
    *,
    attribute: str = REF_ATTRIBUTE,
    prefix: str = REF_PREFIX,
    indent_size: int = 2,
) -> str:
    """Размечает дерево ref-атрибутами и сериализует результат."""
    annotated = annotate(tree, attribute=attribute, prefix=prefix)
    logger.debug("Annotated %d top-level nodes with %s", len(annotated), attribute)
    return tree_to_text(annotated, indent_size=indent_size)


__all__ = [
    "REF_ATTRIBUTE",
    "REF_PREFIX",
    "annotate",
    "annotate_to_text",
    "tree_to_text",
]
