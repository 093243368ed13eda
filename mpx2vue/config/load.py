"""
Загрузчик конфигурации конвертера из YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import ConfigLoadError, ConvertConfig

logger = logging.getLogger(__name__)

# Имя файла, который ищется в рабочем каталоге
CONFIG_FILENAME = "mpx2vue.yaml"

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Optional[Path] = None, *, cwd: Optional[Path] = None) -> ConvertConfig:
    """
    Загружает конфигурацию.

    Args:
        path: Явный путь к файлу; если не задан, ищется mpx2vue.yaml в cwd
        cwd: Каталог поиска по умолчанию (по умолчанию текущий)

    Returns:
        ConvertConfig (значения по умолчанию, если файла нет)

    Raises:
        ConfigLoadError: Явно указанный файл не найден или содержит ошибки
    """
    if path is None:
        candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
        if not candidate.is_file():
            logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, candidate.parent)
            return ConvertConfig()
        path = candidate
    elif not path.is_file():
        raise ConfigLoadError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)
    try:
        return ConvertConfig.from_dict(_read_yaml_map(path))
    except ConfigLoadError as e:
        # Дописываем путь к файлу, если его ещё нет в сообщении
        if str(path) in str(e):
            raise
        raise ConfigLoadError(f"{path}: {e}") from e


__all__ = ["CONFIG_FILENAME", "load_config"]
