"""
Конвейер MPX-шаблонов: разбор разметки, обход дерева,
конвертация в Vue-шаблон и разметка ref-идентификаторами.
"""

from .converter import VueTemplateConverter, convert
from .nodes import Attribute, AttributeBag, Directive, Node, NodeType, Span, TemplateTree
from .parser import DEFAULT_MAX_DEPTH, ParseResult, TemplateParser, parse_template
from .refs import annotate, annotate_to_text, tree_to_text
from .scanner import Scanner
from .traverser import TreeTraverser, traverse, walk

__all__ = [
    # Основные операции
    "parse_template",
    "convert",
    "traverse",
    "annotate",
    "annotate_to_text",
    "tree_to_text",
    "walk",

    # Модель
    "Node",
    "NodeType",
    "Span",
    "Attribute",
    "AttributeBag",
    "Directive",
    "TemplateTree",
    "ParseResult",

    # Низкоуровневые компоненты (для тестирования и отладки)
    "DEFAULT_MAX_DEPTH",
    "Scanner",
    "TemplateParser",
    "TreeTraverser",
    "VueTemplateConverter",
]
