"""
Tests for YAML configuration loading.
"""

import textwrap
from pathlib import Path

import pytest

from mpx2vue.config import CONFIG_FILENAME, ConfigLoadError, ConvertConfig, load_config
from mpx2vue.errors import Mpx2VueUserError
from mpx2vue.template import DEFAULT_MAX_DEPTH


def write_cfg(root: Path, text: str, name: str = CONFIG_FILENAME) -> Path:
    path = root / name
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


def test_defaults_without_file(tmp_path):
    assert load_config(cwd=tmp_path) == ConvertConfig()


def test_default_max_depth():
    assert ConvertConfig().max_depth == 256
    assert ConvertConfig().max_depth == DEFAULT_MAX_DEPTH


def test_large_max_depth_is_accepted():
    assert ConvertConfig.from_dict({"max_depth": 2000}).max_depth == 2000


def test_file_in_cwd(tmp_path):
    write_cfg(tmp_path, """
        indent_size: 4
        tags:
          view: section
        attributes:
          data-x: ""
          scroll-x:
        void_tags: [icon]
        ref_prefix: dbg
    """)

    cfg = load_config(cwd=tmp_path)

    assert cfg.indent_size == 4
    assert cfg.tag_map["view"] == "section"
    assert cfg.tag_map["text"] == "span"
    assert cfg.attribute_map["data-x"] == ""
    assert cfg.attribute_map["scroll-x"] == ""
    assert cfg.attribute_map["hover-class"] == ":class"
    assert {"icon", "img"} <= cfg.void_tag_set
    assert cfg.ref_prefix == "dbg"
    assert cfg.ref_attribute == "wx:ref"


def test_explicit_path(tmp_path):
    path = write_cfg(tmp_path, "max_depth: 50\n", name="custom.yaml")
    assert load_config(path).max_depth == 50


def test_empty_file_gives_defaults(tmp_path):
    path = write_cfg(tmp_path, "", name="empty.yaml")
    assert load_config(path) == ConvertConfig()


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigLoadError, match="not found"):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize("text,message", [
    ("colour: red\n", "unknown config keys: colour"),
    ("indent_size: two\n", "indent_size"),
    ("indent_size: true\n", "indent_size"),
    ("max_depth: 0\n", "max_depth"),
    ("tags: [view]\n", "tags: expected a mapping"),
    ("void_tags: icon\n", "void_tags"),
    ("ref_attribute: ''\n", "ref_attribute"),
    ("- a\n- b\n", "must be a mapping"),
    ("tags: {view\n", "Invalid YAML"),
])
def test_invalid_config(tmp_path, text, message):
    path = write_cfg(tmp_path, text, name="bad.yaml")

    with pytest.raises(ConfigLoadError, match=message) as exc_info:
        load_config(path)

    assert str(path) in str(exc_info.value)


def test_error_hierarchy():
    err = ConfigLoadError("x")
    assert isinstance(err, Mpx2VueUserError)
    assert isinstance(err, ValueError)


def test_to_dict_round_trip():
    cfg = ConvertConfig(indent_size=3, tags={"a": "b"}, void_tags=["x"])
    assert ConvertConfig.from_dict(cfg.to_dict()) == cfg
