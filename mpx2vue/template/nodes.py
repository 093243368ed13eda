"""
Модель дерева MPX-шаблона.

Все узлы представлены одним типом Node с тегом варианта (element, text,
comment). Обход, сериализация и конвертация переключаются по тегу, а не
полагаются на полиморфизм.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class NodeType(enum.Enum):
    """Вариант узла дерева."""
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


@dataclass(frozen=True)
class Span:
    """
    Позиция узла в исходном тексте.

    Attributes:
        start: Смещение первого символа узла
        end: Смещение сразу за последним символом узла
        line: Строка начала (с 1)
        column: Колонка начала (с 1)
    """
    start: int
    end: int
    line: int
    column: int

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end, "line": self.line, "column": self.column}


@dataclass(frozen=True)
class Directive:
    """
    Директива: имя без модификаторов, сырое значение и список модификаторов.

    Значение обычно ещё обёрнуто в {{ }}.
    """
    name: str
    value: str
    modifiers: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Attribute:
    """Атрибут в том виде, в котором он записан в исходнике."""
    name: str
    value: str = ""
    is_directive: bool = False
    directive: Optional[Directive] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "value": self.value,
            "isDirective": self.is_directive,
        }
        if self.directive is not None:
            result["directive"] = {
                "name": self.directive.name,
                "value": self.directive.value,
                "modifiers": list(self.directive.modifiers),
            }
        return result


@dataclass
class AttributeBag:
    """
    Атрибуты элемента.

    Хранится один упорядоченный список `all`; представления `props`
    и `directives` вычисляются из него. Так имя атрибута всегда
    классифицировано ровно один раз, а порядок исходника сохраняется
    для сериализации.
    """
    all: List[Attribute] = field(default_factory=list)

    @property
    def props(self) -> Dict[str, str]:
        """Обычные атрибуты: имя -> значение (повторное имя перезаписывает)."""
        return {a.name: a.value for a in self.all if not a.is_directive}

    @property
    def directives(self) -> Dict[str, Directive]:
        """Директивы: имя директивы (без модификаторов) -> Directive."""
        return {
            a.directive.name: a.directive
            for a in self.all
            if a.is_directive and a.directive is not None
        }

    def get(self, name: str) -> Optional[Attribute]:
        """Последний атрибут с указанным именем или None."""
        for attr in reversed(self.all):
            if attr.name == name:
                return attr
        return None

    def __len__(self) -> int:
        return len(self.all)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "props": self.props,
            "directives": {
                name: {"value": d.value, "modifiers": list(d.modifiers)}
                for name, d in self.directives.items()
            },
            "all": [a.to_dict() for a in self.all],
        }


@dataclass
class Node:
    """
    Узел дерева шаблона.

    Для элементов заполнены name, attributes, children и self_closing;
    для текста и комментариев - content. Во время обхода и конвертации
    узлы не изменяются.
    """
    type: NodeType
    name: str = ""
    attributes: AttributeBag = field(default_factory=AttributeBag)
    children: List["Node"] = field(default_factory=list)
    content: str = ""
    self_closing: bool = False
    span: Optional[Span] = None

    @classmethod
    def element(
        cls,
        name: str,
        attributes: Optional[List[Attribute]] = None,
        children: Optional[List["Node"]] = None,
        *,
        self_closing: bool = False,
        span: Optional[Span] = None,
    ) -> "Node":
        return cls(
            type=NodeType.ELEMENT,
            name=name,
            attributes=AttributeBag(list(attributes or [])),
            children=list(children or []),
            self_closing=self_closing,
            span=span,
        )

    @classmethod
    def text(cls, content: str, *, span: Optional[Span] = None) -> "Node":
        return cls(type=NodeType.TEXT, content=content, span=span)

    @classmethod
    def comment(cls, content: str, *, span: Optional[Span] = None) -> "Node":
        return cls(type=NodeType.COMMENT, content=content, span=span)

    @property
    def is_element(self) -> bool:
        return self.type is NodeType.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.type is NodeType.TEXT

    @property
    def is_comment(self) -> bool:
        return self.type is NodeType.COMMENT

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует узел (рекурсивно) в словарь для JSON-отчёта."""
        result: Dict[str, Any] = {"type": self.type.value}
        if self.is_element:
            result["name"] = self.name
            result["attributes"] = self.attributes.to_dict()
            result["children"] = [child.to_dict() for child in self.children]
            result["selfClosing"] = self.self_closing
        else:
            result["content"] = self.content
        if self.span is not None:
            result["position"] = self.span.to_dict()
        return result


# Лес узлов верхнего уровня
TemplateTree = List[Node]


def format_tree(tree: TemplateTree, indent: int = 0) -> str:
    """Форматирует дерево для отладки."""
    lines = []
    prefix = "  " * indent

    for node in tree:
        if node.is_element:
            attrs = " ".join(f"{a.name}={a.value!r}" for a in node.attributes.all)
            suffix = " /" if node.self_closing else ""
            lines.append(f"{prefix}<{node.name}{' ' + attrs if attrs else ''}{suffix}>")
            if node.children:
                lines.append(format_tree(node.children, indent + 1))
        elif node.is_text:
            preview = node.content.strip()
            preview = preview[:50] + "..." if len(preview) > 50 else preview
            lines.append(f"{prefix}Text({preview!r})")
        else:
            lines.append(f"{prefix}Comment({node.content!r})")

    return "\n".join(lines)


__all__ = [
    "NodeType",
    "Span",
    "Directive",
    "Attribute",
    "AttributeBag",
    "Node",
    "TemplateTree",
    "format_tree",
]
