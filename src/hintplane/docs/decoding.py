"""Typed decoding of documentation bundles into module summaries.

A bundle is a JSON list of modules::

    [{"name": "Maybe", "comment": "...",
      "aliases": [{"name": ..., "comment": ..., "args": [...], "type": ...}],
      "types":   [{"name": ..., "comment": ..., "args": [...],
                   "cases": [["Just", ["a"]], ["Nothing", []]]}],
      "values":  [{"name": ..., "comment": ..., "type": ...}]}]

Newer bundles name the union list ``unions`` and add ``binops``; both are
accepted (binops become values). Project summaries sent by the host use the
same shape, with ``tipe`` accepted as a synonym of ``type`` and bare
strings accepted as union cases.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from hintplane.core.errors import DocsError
from hintplane.index.models import Declaration, ModuleSummary, UnionType, Values


class DeclarationDoc(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    comment: str = ""
    args: list[str] = Field(default_factory=list)
    type: str = Field(default="", validation_alias=AliasChoices("type", "tipe"))

    def to_declaration(self) -> Declaration:
        return Declaration(name=self.name, comment=self.comment, tipe=self.type)


class UnionDoc(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    comment: str = ""
    args: list[str] = Field(default_factory=list)
    type: str = Field(default="", validation_alias=AliasChoices("type", "tipe"))
    cases: list[str] = Field(default_factory=list)

    @field_validator("cases", mode="before")
    @classmethod
    def case_names(cls, v: Any) -> Any:
        """``[name, [args]]`` pairs and bare names both reduce to the name."""
        if not isinstance(v, list):
            return v
        return [case[0] if isinstance(case, list | tuple) and case else case for case in v]

    def to_union_type(self) -> UnionType:
        return UnionType(
            name=self.name,
            comment=self.comment,
            tipe=self.type or " ".join([self.name, *self.args]),
            cases=tuple(self.cases),
        )


class ModuleDoc(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    comment: str = ""
    aliases: list[DeclarationDoc] = Field(default_factory=list)
    types: list[UnionDoc] = Field(
        default_factory=list,
        validation_alias=AliasChoices("types", "unions", "tipes"),
    )
    values: list[DeclarationDoc] = Field(default_factory=list)
    binops: list[DeclarationDoc] = Field(default_factory=list)

    def to_summary(self, source_path: str) -> ModuleSummary:
        return ModuleSummary(
            source_path=source_path,
            name=self.name,
            comment=self.comment,
            values=Values(
                aliases=tuple(alias.to_declaration() for alias in self.aliases),
                tipes=tuple(union.to_union_type() for union in self.types),
                values=tuple(value.to_declaration() for value in [*self.values, *self.binops]),
            ),
        )


_BUNDLE = TypeAdapter(list[ModuleDoc])


def decode_module(data: Any, source_path: str) -> ModuleSummary:
    """Decode one module record (already parsed JSON)."""
    return ModuleDoc.model_validate(data).to_summary(source_path)


def decode_bundle(raw: bytes | str, source_path: str, *, url: str = "") -> list[ModuleSummary]:
    """Decode a bundle's JSON text; every module gets ``source_path``.

    Raises:
        DocsError: If the payload is not valid JSON or not a module list.
    """
    try:
        modules = _BUNDLE.validate_json(raw)
    except ValidationError as e:
        raise DocsError.decode_failed(url or source_path, str(e.errors()[0]["msg"])) from e
    return [module.to_summary(source_path) for module in modules]
