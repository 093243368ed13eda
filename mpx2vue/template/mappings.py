"""
Таблицы соответствия MPX -> Vue.

Статические данные, которыми пользуются парсер (префиксы директив)
и конвертер (теги, атрибуты, void-теги).
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Tuple

# Атрибут считается директивой, если его имя начинается с одного из префиксов
DIRECTIVE_PREFIXES: Tuple[str, ...] = ("wx:", "@", "bind", "catch")

BIND_PREFIX = "bind"
CATCH_PREFIX = "catch"

# Имена тегов мини-программы -> теги Vue/HTML
TAG_MAP: Dict[str, str] = {
    "view": "div",
    "text": "span",
    "image": "img",
    "navigator": "router-link",
    "button": "button",
    "input": "input",
    "textarea": "textarea",
    "scroll-view": "div",
    "swiper": "div",
    "swiper-item": "div",
    "picker": "select",
    "picker-view": "div",
    "slider": "input",
    "switch": "input",
    "checkbox": "input",
    "radio": "input",
    "form": "form",
    "label": "label",
}

# Обычные атрибуты. Пустая строка - атрибут отбрасывается.
ATTRIBUTE_MAP: Dict[str, str] = {
    "wx:key": "key",
    "hover-class": ":class",
    "hover-start-time": "",
    "hover-stay-time": "",
    "scroll-x": "",
    "scroll-y": "",
    "scroll-top": ":scroll-top",
    "scroll-left": ":scroll-left",
    "enable-back-to-top": "",
}

# Теги, которые в целевом диалекте всегда самозакрывающиеся
VOID_TAGS: FrozenSet[str] = frozenset({
    "img", "input", "br", "hr", "meta", "link", "area",
    "base", "col", "embed", "source", "track", "wbr",
})

# Имена событий мини-программы, отличающиеся от DOM
EVENT_MAP: Dict[str, str] = {
    "tap": "click",
}

# Директивы с прямым соответствием: имя -> атрибут Vue
SIMPLE_DIRECTIVES: Dict[str, str] = {
    "wx:if": "v-if",
    "wx:elif": "v-else-if",
    "wx:model": "v-model",
    "wx:show": "v-show",
    "wx:class": ":class",
    "wx:style": ":style",
}

DEFAULT_LOOP_ITEM = "item"
DEFAULT_LOOP_INDEX = "index"


def is_directive_name(name: str) -> bool:
    return name.startswith(DIRECTIVE_PREFIXES)


__all__ = [
    "DIRECTIVE_PREFIXES",
    "BIND_PREFIX",
    "CATCH_PREFIX",
    "TAG_MAP",
    "ATTRIBUTE_MAP",
    "VOID_TAGS",
    "EVENT_MAP",
    "SIMPLE_DIRECTIVES",
    "DEFAULT_LOOP_ITEM",
    "DEFAULT_LOOP_INDEX",
    "is_directive_name",
]
