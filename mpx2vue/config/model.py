"""
Модель конфигурации конвертера.

Конфигурация дополняет встроенные таблицы соответствия и задаёт
параметры вывода. Читается из YAML (см. load.py).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, FrozenSet, List

from ..errors import Mpx2VueUserError
from ..template.mappings import ATTRIBUTE_MAP, TAG_MAP, VOID_TAGS
from ..template.parser import DEFAULT_MAX_DEPTH
from ..template.refs import REF_ATTRIBUTE, REF_PREFIX


class ConfigLoadError(Mpx2VueUserError, ValueError):
    """Ошибка загрузки конфигурации с указанием ключа."""
    pass


@dataclass
class ConvertConfig:
    """
    Настройки разбора, конвертации и разметки ref.

    tags/attributes накладываются поверх встроенных таблиц,
    void_tags расширяет встроенный набор.
    """
    indent_size: int = 2
    max_depth: int = DEFAULT_MAX_DEPTH
    tags: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, str] = field(default_factory=dict)
    void_tags: List[str] = field(default_factory=list)
    ref_attribute: str = REF_ATTRIBUTE
    ref_prefix: str = REF_PREFIX

    @property
    def tag_map(self) -> Dict[str, str]:
        merged = dict(TAG_MAP)
        merged.update(self.tags)
        return merged

    @property
    def attribute_map(self) -> Dict[str, str]:
        merged = dict(ATTRIBUTE_MAP)
        merged.update(self.attributes)
        return merged

    @property
    def void_tag_set(self) -> FrozenSet[str]:
        return VOID_TAGS | frozenset(self.void_tags)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConvertConfig":
        """Создание экземпляра из словаря (из YAML) с проверкой типов."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigLoadError(f"unknown config keys: {', '.join(unknown)}")

        cfg = cls()
        if "indent_size" in data:
            cfg.indent_size = _non_negative_int(data["indent_size"], "indent_size")
        if "max_depth" in data:
            cfg.max_depth = _non_negative_int(data["max_depth"], "max_depth")
            if cfg.max_depth == 0:
                raise ConfigLoadError("max_depth: must be positive")
        if "tags" in data:
            cfg.tags = _str_map(data["tags"], "tags")
        if "attributes" in data:
            cfg.attributes = _str_map(data["attributes"], "attributes")
        if "void_tags" in data:
            raw = data["void_tags"]
            if not isinstance(raw, list) or not all(isinstance(t, str) for t in raw):
                raise ConfigLoadError("void_tags: expected a list of strings")
            cfg.void_tags = list(raw)
        for key in ("ref_attribute", "ref_prefix"):
            if key in data:
                value = data[key]
                if not isinstance(value, str) or not value:
                    raise ConfigLoadError(f"{key}: expected a non-empty string")
                setattr(cfg, key, value)
        return cfg

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML."""
        return {
            "indent_size": self.indent_size,
            "max_depth": self.max_depth,
            "tags": dict(self.tags),
            "attributes": dict(self.attributes),
            "void_tags": list(self.void_tags),
            "ref_attribute": self.ref_attribute,
            "ref_prefix": self.ref_prefix,
        }


def _non_negative_int(value: Any, key: str) -> int:
    # bool - подкласс int, его не принимаем
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigLoadError(f"{key}: expected a non-negative integer, got {value!r}")
    return value


def _str_map(value: Any, key: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigLoadError(f"{key}: expected a mapping")
    result: Dict[str, str] = {}
    for k, v in value.items():
        if v is None:
            v = ""
        if not isinstance(k, str) or not isinstance(v, str):
            raise ConfigLoadError(f"{key}.{k}: expected a string value")
        result[k] = v
    return result


__all__ = ["ConfigLoadError", "ConvertConfig"]
