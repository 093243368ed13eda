"""
Tests for the JSON parse report.
"""

from mpx2vue.report_schema import ParseReport
from mpx2vue.template import parse_template


def test_report_shape():
    result = parse_template('<!-- c --><input wx:model.lazy="{{ v }}" type="text"/>')

    data = ParseReport.from_result(result).to_json_dict()

    assert data["ok"] is True
    assert data["errors"] == [] and data["warnings"] == []
    comment, node = data["tree"]
    assert comment == {
        "type": "comment",
        "content": " c ",
        "position": {"start": 0, "end": 10, "line": 1, "column": 1},
    }
    assert node["name"] == "input"
    assert node["selfClosing"] is True
    assert node["children"] == []
    attrs = node["attributes"]
    assert attrs["props"] == {"type": "text"}
    assert attrs["directives"] == {"wx:model": {"value": "{{ v }}", "modifiers": ["lazy"]}}
    assert attrs["all"][0] == {
        "name": "wx:model.lazy",
        "value": "{{ v }}",
        "isDirective": True,
        "directive": {"name": "wx:model", "value": "{{ v }}", "modifiers": ["lazy"]},
    }
    assert attrs["all"][1] == {"name": "type", "value": "text", "isDirective": False}


def test_report_with_errors():
    data = ParseReport.from_result(parse_template("<div></span>")).to_json_dict()

    assert data["ok"] is False
    assert len(data["errors"]) == 1
    assert data["tree"][0]["name"] == "div"
