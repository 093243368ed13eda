"""
Pydantic-схема JSON-отчёта команды `mpx2vue parse`.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .template.parser import ParseResult
from .version import tool_version


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class SpanModel(_Model):
    start: int
    end: int
    line: int
    column: int


class DirectiveModel(_Model):
    name: str
    value: str
    modifiers: List[str] = Field(default_factory=list)


class DirectiveValueModel(_Model):
    value: str
    modifiers: List[str] = Field(default_factory=list)


class AttributeModel(_Model):
    name: str
    value: str
    is_directive: bool = Field(alias="isDirective")
    directive: Optional[DirectiveModel] = None


class AttributesModel(_Model):
    props: Dict[str, str] = Field(default_factory=dict)
    directives: Dict[str, DirectiveValueModel] = Field(default_factory=dict)
    all: List[AttributeModel] = Field(default_factory=list)


class NodeModel(_Model):
    type: Literal["element", "text", "comment"]
    name: Optional[str] = None
    attributes: Optional[AttributesModel] = None
    children: Optional[List["NodeModel"]] = None
    self_closing: Optional[bool] = Field(default=None, alias="selfClosing")
    content: Optional[str] = None
    position: Optional[SpanModel] = None


NodeModel.model_rebuild()


class ParseReport(_Model):
    version: str
    ok: bool
    tree: List[NodeModel] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ParseResult) -> "ParseReport":
        return cls.model_validate({
            "version": tool_version(),
            "ok": result.ok,
            "tree": [node.to_dict() for node in result.tree],
            "errors": list(result.errors),
            "warnings": list(result.warnings),
        })

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "SpanModel",
    "DirectiveModel",
    "DirectiveValueModel",
    "AttributeModel",
    "AttributesModel",
    "NodeModel",
    "ParseReport",
]
