"""
Парсер разметки MPX-шаблонов.

Строит лес узлов (элементы, текст, комментарии) поверх Scanner.
Открытые элементы хранятся в явном стеке, поэтому глубина вложенности
ограничена только max_depth, а не стеком вызовов Python.
Никогда не бросает исключений: все проблемы попадают в списки
errors/warnings результата в виде "line <L> column <C>: <message>".

Грамматика (неформально):
template   → node*
node       → comment | element | text
comment    → "<!--" .* ("-->" | EOF)
element    → "<" NAME attribute* ("/>" | ">" node* "</" NAME ">")
attribute  → ATTR_NAME ("=" value)?
value      → '"' ... '"' | "'" ... "'" | [^\\s>/]+
text       → [^<]+
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .mappings import BIND_PREFIX, CATCH_PREFIX, is_directive_name
from .nodes import Attribute, Directive, Node, Span, TemplateTree
from .scanner import Position, Scanner

logger = logging.getLogger(__name__)

# Максимальная глубина вложенности элементов по умолчанию
DEFAULT_MAX_DEPTH = 256

_TAG_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "-_")
_ATTR_NAME_CHARS = _TAG_NAME_CHARS | frozenset(":@.")


@dataclass
class ParseResult:
    """
    Результат разбора шаблона.

    Attributes:
        tree: Узлы верхнего уровня
        errors: Ошибки разбора с позицией
        warnings: Некритичные замечания
    """
    tree: TemplateTree = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class TemplateParser:
    """
    Парсер MPX-шаблона.

    Каждый вызов parse_template создаёт свой экземпляр, общего
    изменяемого состояния между вызовами нет.
    """

    def __init__(self, text: str, *, max_depth: int = DEFAULT_MAX_DEPTH):
        self.scanner = Scanner(text)
        self.max_depth = max_depth
        self.errors: List[str] = []
        self.warnings: List[str] = []
        # Разбор прерван до конца текста (превышена глубина)
        self._aborted = False

    def parse(self) -> ParseResult:
        """
        Разбирает весь текст.

        Returns:
            ParseResult с деревом и диагностикой
        """
        s = self.scanner
        tree: TemplateTree = []
        # Открытые элементы и позиции их "<"
        open_elements: List[Tuple[Node, Position]] = []

        while True:
            s.skip_whitespace()
            if s.is_eof():
                break

            if s.current() == "<" and s.peek() == "/":
                self._close_element(open_elements)
                continue

            siblings = open_elements[-1][0].children if open_elements else tree
            start = s.get_position()
            node = self._parse_node()
            if node is None:
                continue

            if node.is_element and not node.self_closing:
                if len(open_elements) >= self.max_depth:
                    self._error(f"element nesting is deeper than {self.max_depth} levels")
                    self._abort()
                    continue
                open_elements.append((node, start))

            siblings.append(node)

        # Незакрытые элементы, начиная с самого глубокого
        while open_elements:
            element, start = open_elements.pop()
            if not self._aborted:
                self._warning(f"element <{element.name}> is not closed before end of input")
            element.span = self._span_from(start)

        logger.debug(
            "Parsed template into %d top-level nodes (%d errors, %d warnings)",
            len(tree), len(self.errors), len(self.warnings),
        )
        return ParseResult(tree=tree, errors=self.errors, warnings=self.warnings)

    # ---- Узлы ----

    def _parse_node(self) -> Optional[Node]:
        if self.scanner.current() == "<":
            return self._parse_element()
        return self._parse_text()

    def _parse_element(self) -> Optional[Node]:
        """
        Разбирает комментарий или открывающий тег.

        Дети элемента разбираются в основном цикле parse(); там же
        элементу назначается окончательный span.
        """
        s = self.scanner
        start = s.get_position()
        s.advance()  # '<'

        if s.startswith("!--"):
            return self._parse_comment(start)

        tag_name = self._parse_name(_TAG_NAME_CHARS)
        if not tag_name:
            self._error("expected tag name")
            return None

        attributes = self._parse_attributes(tag_name)

        self_closing = False
        if s.current() == "/" and s.peek() == ">":
            self_closing = True
            s.advance()

        if not self._consume(">"):
            self._error('expected ">"')
            return None

        return Node.element(
            tag_name,
            attributes,
            self_closing=self_closing,
            span=self._span_from(start),
        )

    def _close_element(self, open_elements: List[Tuple[Node, Position]]) -> None:
        """Разбирает закрывающий тег и закрывает самый глубокий открытый элемент."""
        start = self.scanner.get_position()
        end_name = self._parse_end_tag()

        if not open_elements:
            self._error(f"unexpected closing tag </{end_name or ''}>", start)
            return

        element, element_start = open_elements.pop()
        if end_name != element.name:
            self._error(
                f"mismatched closing tag: expected </{element.name}>, "
                f"found </{end_name or ''}>",
                start,
            )
        element.span = self._span_from(element_start)

    def _parse_end_tag(self) -> Optional[str]:
        s = self.scanner
        s.advance()  # '<'
        s.advance()  # '/'
        tag_name = self._parse_name(_TAG_NAME_CHARS)
        s.skip_whitespace()
        if not self._consume(">"):
            self._error('expected ">" to finish closing tag')
        return tag_name

    def _parse_comment(self, start: Position) -> Node:
        s = self.scanner
        for _ in range(3):  # '!--'
            s.advance()

        chars: List[str] = []
        while not s.is_eof():
            if s.startswith("-->"):
                for _ in range(3):
                    s.advance()
                break
            chars.append(s.advance())

        return Node.comment("".join(chars), span=self._span_from(start))

    def _parse_text(self) -> Optional[Node]:
        s = self.scanner
        start = s.get_position()
        chars: List[str] = []

        while not s.is_eof() and s.current() != "<":
            chars.append(s.advance())

        text = "".join(chars)
        if text.strip():
            return Node.text(text, span=self._span_from(start))
        return None

    # ---- Атрибуты ----

    def _parse_attributes(self, tag_name: str) -> List[Attribute]:
        s = self.scanner
        attributes: List[Attribute] = []
        seen = set()

        while not s.is_eof():
            s.skip_whitespace()
            if s.current() in (">", "/"):
                break

            attr = self._parse_attribute()
            if attr is None:
                break

            # bind:tap и bindtap - одна и та же директива
            key = attr.directive.name if attr.directive is not None else attr.name
            if key in seen:
                self._warning(f"duplicate attribute '{attr.name}' on <{tag_name}>")
            seen.add(key)
            attributes.append(attr)

        return attributes

    def _parse_attribute(self) -> Optional[Attribute]:
        s = self.scanner
        name = self._parse_name(_ATTR_NAME_CHARS)
        if not name:
            return None

        s.skip_whitespace()
        value = ""
        if s.current() == "=":
            s.advance()
            s.skip_whitespace()
            value = self._parse_attribute_value()

        if is_directive_name(name):
            return Attribute(name, value, is_directive=True, directive=self._parse_directive(name, value))
        return Attribute(name, value)

    def _parse_attribute_value(self) -> str:
        s = self.scanner
        quote = s.current()
        if quote in ('"', "'"):
            return self._parse_quoted_string(quote)

        chars: List[str] = []
        while not s.is_eof() and not s.current().isspace() and s.current() not in (">", "/"):
            chars.append(s.advance())
        return "".join(chars)

    def _parse_quoted_string(self, quote: str) -> str:
        s = self.scanner
        start = s.get_position()
        s.advance()  # открывающая кавычка
        chars: List[str] = []

        while not s.is_eof() and s.current() != quote:
            if s.current() == "\\":
                s.advance()
                if not s.is_eof():
                    chars.append(s.advance())
            else:
                chars.append(s.advance())

        if not self._consume(quote):
            self._error(f"unterminated attribute value, expected {quote}", start)

        return "".join(chars)

    @staticmethod
    def _parse_directive(name: str, value: str) -> Directive:
        base, *modifiers = name.split(".")
        # bind:tap / catch:tap -> bindtap / catchtap
        for prefix in (BIND_PREFIX, CATCH_PREFIX):
            if base.startswith(prefix + ":"):
                base = prefix + base[len(prefix) + 1:]
        return Directive(name=base, value=value, modifiers=modifiers)

    # ---- Вспомогательные методы ----

    def _parse_name(self, allowed: frozenset) -> Optional[str]:
        s = self.scanner
        chars: List[str] = []
        while not s.is_eof() and s.current() in allowed:
            chars.append(s.advance())
        return "".join(chars) or None

    def _consume(self, expected: str) -> bool:
        if self.scanner.current() == expected:
            self.scanner.advance()
            return True
        return False

    def _abort(self) -> None:
        """Пропускает остаток текста."""
        s = self.scanner
        while not s.is_eof():
            s.advance()
        self._aborted = True

    def _span_from(self, start: Position) -> Span:
        return Span(start.offset, self.scanner.offset, start.line, start.column)

    def _error(self, message: str, position: Optional[Position] = None) -> None:
        pos = position or self.scanner.get_position()
        self.errors.append(f"line {pos.line} column {pos.column}: {message}")

    def _warning(self, message: str, position: Optional[Position] = None) -> None:
        pos = position or self.scanner.get_position()
        self.warnings.append(f"line {pos.line} column {pos.column}: {message}")


def parse_template(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> ParseResult:
    """
    Разбирает MPX-шаблон в дерево узлов.

    Args:
        text: Текст шаблона
        max_depth: Максимальная глубина вложенности элементов

    Returns:
        ParseResult; некорректная разметка отражается в errors
    """
    return TemplateParser(text, max_depth=max_depth).parse()


__all__ = ["DEFAULT_MAX_DEPTH", "ParseResult", "TemplateParser", "parse_template"]
