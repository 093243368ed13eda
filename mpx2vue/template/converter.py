"""
Конвертер дерева MPX-шаблона в текст Vue-шаблона.

Обходит дерево через TreeTraverser и на входе/выходе из узлов
пишет эквивалентную разметку целевого диалекта: теги, атрибуты
и директивы переводятся по таблицам из mappings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet, List, Mapping, Optional, Sequence

from .mappings import (
    ATTRIBUTE_MAP,
    BIND_PREFIX,
    CATCH_PREFIX,
    DEFAULT_LOOP_INDEX,
    DEFAULT_LOOP_ITEM,
    EVENT_MAP,
    SIMPLE_DIRECTIVES,
    TAG_MAP,
    VOID_TAGS,
)
from .nodes import Directive, Node, TemplateTree
from .traverser import TreeTraverser

if TYPE_CHECKING:
    from ..config.model import ConvertConfig

logger = logging.getLogger(__name__)


def unwrap_expression(expr: str) -> str:
    """
    Снимает {{ }} со значения, целиком обёрнутого в одну интерполяцию.

    Любое другое значение возвращается без изменений.
    """
    if expr.startswith("{{") and expr.endswith("}}"):
        inner = expr[2:-2]
        if "{{" not in inner and "}}" not in inner:
            return inner.strip()
    return expr


def format_attribute(name: str, value: str) -> str:
    """
    name="value"; значение с двойными кавычками пишется в одинарных.

    Если в значении есть оба вида кавычек, двойные экранируются как &quot;.
    """
    if '"' in value:
        if "'" not in value:
            return f"{name}='{value}'"
        value = value.replace('"', "&quot;")
    return f'{name}="{value}"'


@dataclass(frozen=True)
class LoopAliases:
    """Имена переменной элемента и индекса для v-for."""
    item: str = DEFAULT_LOOP_ITEM
    index: str = DEFAULT_LOOP_INDEX

    @classmethod
    def for_element(cls, node: Node) -> "LoopAliases":
        directives = node.attributes.directives
        item = directives.get("wx:for-item")
        index = directives.get("wx:for-index")
        return cls(
            item=unwrap_expression(item.value) if item and item.value else DEFAULT_LOOP_ITEM,
            index=unwrap_expression(index.value) if index and index.value else DEFAULT_LOOP_INDEX,
        )


class VueTemplateConverter:
    """
    Конвертер MPX -> Vue.

    Накапливает строки вывода и текущий уровень отступа. Входные
    узлы только читаются.
    """

    def __init__(self, config: Optional["ConvertConfig"] = None):
        if config is not None:
            self.indent_size = config.indent_size
            self.tag_map: Mapping[str, str] = config.tag_map
            self.attribute_map: Mapping[str, str] = config.attribute_map
            self.void_tags: AbstractSet[str] = config.void_tag_set
        else:
            self.indent_size = 2
            self.tag_map = TAG_MAP
            self.attribute_map = ATTRIBUTE_MAP
            self.void_tags = VOID_TAGS

        self._traverser = TreeTraverser()
        self._lines: List[str] = []
        self._indent_level = 0

    def convert(self, tree: TemplateTree) -> str:
        """
        Конвертирует дерево в текст Vue-шаблона.

        Args:
            tree: Узлы верхнего уровня

        Returns:
            Текст шаблона без завершающего перевода строки
        """
        self._lines = []
        self._indent_level = 0

        self._traverser.traverse(tree, enter=self._on_enter, exit=self._on_exit)

        logger.debug("Converted %d top-level nodes into %d lines", len(tree), len(self._lines))
        return "\n".join(self._lines)

    # ---- Колбэки обхода ----

    def _on_enter(self, node: Node, parent: Optional[Node]) -> None:
        if node.is_element:
            self._write_open_tag(node)
        elif node.is_text:
            content = node.content.strip()
            if content:
                # Синтаксис интерполяции в Vue тот же
                self._write_line(content)
        elif node.is_comment:
            self._write_line(f"<!--{node.content}-->")

    def _on_exit(self, node: Node, parent: Optional[Node]) -> None:
        if node.is_element and node.children:
            self._indent_level -= 1
            self._write_line(f"</{self.convert_tag_name(node.name)}>")

    def _write_open_tag(self, node: Node) -> None:
        tag_name = self.convert_tag_name(node.name)
        attributes = self.convert_attributes(node)
        head = f"<{tag_name} {attributes}" if attributes else f"<{tag_name}"

        if node.children:
            self._write_line(head + ">")
            self._indent_level += 1
        elif tag_name in self.void_tags:
            self._write_line(head + " />")
        else:
            self._write_line(f"{head}></{tag_name}>")

    def _write_line(self, content: str) -> None:
        indent = " " * (self._indent_level * self.indent_size)
        self._lines.append(indent + content)

    # ---- Отображения ----

    def convert_tag_name(self, name: str) -> str:
        return self.tag_map.get(name, name)

    def convert_attributes(self, node: Node) -> str:
        """
        Обычные атрибуты, затем директивы, через пробел.

        Если два исходных атрибута дают одно имя Vue (bindtap и catchtap
        оба дают @click), остаётся первый.
        """
        converted_parts: List[str] = []

        for name, value in node.attributes.props.items():
            converted_parts.append(self.convert_attribute(name, value))

        loop = LoopAliases.for_element(node)
        for name, directive in node.attributes.directives.items():
            converted_parts.append(self.convert_directive(name, directive, loop))

        parts: List[str] = []
        emitted = set()
        for converted in converted_parts:
            if not converted:
                continue
            vue_name = converted.split("=", 1)[0]
            if vue_name in emitted:
                logger.debug("Dropping duplicate attribute %s on <%s>", vue_name, node.name)
                continue
            emitted.add(vue_name)
            parts.append(converted)

        return " ".join(parts)

    def convert_attribute(self, name: str, value: str) -> str:
        vue_name = self.attribute_map.get(name, name)
        if not vue_name:
            return ""
        return format_attribute(vue_name, value)

    def convert_directive(self, name: str, directive: Directive, loop: Optional[LoopAliases] = None) -> str:
        """
        Переводит одну директиву в атрибут Vue.

        Args:
            name: Имя директивы без модификаторов
            directive: Директива
            loop: Имена переменных цикла элемента

        Returns:
            Текст атрибута или "" если директива ничего не порождает
        """
        loop = loop or LoopAliases()
        value = directive.value
        modifiers = directive.modifiers

        if name in SIMPLE_DIRECTIVES:
            return format_attribute(SIMPLE_DIRECTIVES[name], unwrap_expression(value))

        if name == "wx:else":
            return "v-else"

        if name == "wx:for":
            return format_attribute("v-for", f"({loop.item}, {loop.index}) in {unwrap_expression(value)}")

        if name in ("wx:for-item", "wx:for-index"):
            # Учтены в v-for
            return ""

        if name == "wx:key":
            key = unwrap_expression(value)
            return format_attribute(":key", loop.item if key == "*this" else key)

        if name == "wx:ref":
            return format_attribute("ref", value)

        if name in ("bindtap", "catchtap", "@tap"):
            return self._event("click", modifiers, value)

        if name.startswith(BIND_PREFIX):
            return self._event(name[len(BIND_PREFIX):], modifiers, value)

        if name.startswith(CATCH_PREFIX):
            return self._event(name[len(CATCH_PREFIX):], ["stop", *modifiers], value)

        if name.startswith("@"):
            return self._event(name[1:], modifiers, value)

        logger.debug("Passing through unknown directive %s", name)
        return format_attribute(_with_modifiers(name, modifiers), value)

    @staticmethod
    def _event(event: str, modifiers: Sequence[str], handler: str) -> str:
        event = EVENT_MAP.get(event, event)
        return format_attribute("@" + _with_modifiers(event, modifiers), handler)


def _with_modifiers(name: str, modifiers: Sequence[str]) -> str:
    return name + "".join(f".{m}" for m in modifiers)


def convert(tree: TemplateTree, config: Optional["ConvertConfig"] = None) -> str:
    """
    Конвертирует дерево MPX-шаблона в текст Vue-шаблона.

    Не падает на корректном дереве: неизвестные атрибуты и директивы
    передаются как есть.
    """
    return VueTemplateConverter(config).convert(tree)


__all__ = [
    "LoopAliases",
    "VueTemplateConverter",
    "convert",
    "format_attribute",
    "unwrap_expression",
]
