"""
Посимвольный курсор по тексту шаблона.

Отслеживает смещение, строку и колонку. Никогда не бросает исключений:
чтение за концом текста возвращает пустую строку.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Снимок позиции курсора."""
    offset: int
    line: int
    column: int


class Scanner:
    """
    Курсор по входному тексту.

    Перевод строки увеличивает номер строки и сбрасывает колонку в 1.
    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.offset = 0
        self.line = 1
        self.column = 1

    def current(self) -> str:
        """Символ под курсором или "" в конце текста."""
        if self.offset < self.length:
            return self.text[self.offset]
        return ""

    def peek(self, n: int = 1) -> str:
        """Символ на n позиций впереди курсора без продвижения."""
        index = self.offset + n
        if 0 <= index < self.length:
            return self.text[index]
        return ""

    def startswith(self, literal: str) -> bool:
        """Проверяет, начинается ли остаток текста с literal."""
        return self.text.startswith(literal, self.offset)

    def advance(self) -> str:
        """Потребляет один символ и возвращает его."""
        char = self.current()
        if not char:
            return ""
        self.offset += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def skip_whitespace(self) -> None:
        while self.current().isspace():
            self.advance()

    def is_eof(self) -> bool:
        return self.offset >= self.length

    def get_position(self) -> Position:
        return Position(self.offset, self.line, self.column)


__all__ = ["Position", "Scanner"]
