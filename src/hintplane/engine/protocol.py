"""JSON-lines wire protocol between the host editor and the engine.

Each inbound line is an object whose ``type`` is an event name
(``"get-hints-for-partial"``, ``"file-contents-changed"``, ...). Outbound
events are encoded the same way, with dataclass fields as snake_case keys.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from hintplane.core.errors import ProtocolError
from hintplane.docs.decoding import ModuleDoc
from hintplane.engine.events import (
    ActiveFileChanged,
    ActiveTokenChanged,
    CanGoToDefinition,
    FileContentsChanged,
    FileContentsRemoved,
    GetHintsForPartial,
    GetImportersForToken,
    GetImportSuggestions,
    GoToDefinition,
    GoToSymbol,
    InboundEvent,
    OutboundEvent,
    PackagesNeeded,
)
from hintplane.index.models import ActiveFile


class _Message(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ActiveTokenChangedMessage(_Message):
    type: Literal["active-token-changed"]
    token: str | None = None

    def to_event(self) -> InboundEvent:
        return ActiveTokenChanged(self.token)


class ActiveFileChangedMessage(_Message):
    type: Literal["active-file-changed"]
    path: str | None = None
    project_directory: str | None = None

    def to_event(self) -> InboundEvent:
        if not self.path:
            return ActiveFileChanged(None)
        return ActiveFileChanged(ActiveFile(self.path, self.project_directory or ""))


class FileContentsChangedMessage(_Message):
    type: Literal["file-contents-changed"]
    path: str
    module: ModuleDoc
    # Entries are normalized permissively by the import resolver.
    imports: list[dict[str, Any]] = Field(default_factory=list)

    def to_event(self) -> InboundEvent:
        return FileContentsChanged(
            path=self.path,
            module_docs=self.module.to_summary(self.path),
            raw_imports=tuple(self.imports),
        )


class FileContentsRemovedMessage(_Message):
    type: Literal["file-contents-removed"]
    path: str

    def to_event(self) -> InboundEvent:
        return FileContentsRemoved(self.path)


class PackagesNeededMessage(_Message):
    type: Literal["packages-needed"]
    packages: list[str] = Field(default_factory=list)

    def to_event(self) -> InboundEvent:
        return PackagesNeeded(tuple(self.packages))


class GoToDefinitionMessage(_Message):
    type: Literal["go-to-definition"]
    token: str | None = None

    def to_event(self) -> InboundEvent:
        return GoToDefinition(self.token)


class GoToSymbolMessage(_Message):
    type: Literal["go-to-symbol"]
    project_directory: str | None = None
    token: str | None = None

    def to_event(self) -> InboundEvent:
        return GoToSymbol(self.project_directory, self.token)


class GetHintsForPartialMessage(_Message):
    type: Literal["get-hints-for-partial"]
    partial: str = ""

    def to_event(self) -> InboundEvent:
        return GetHintsForPartial(self.partial)


class GetImportSuggestionsMessage(_Message):
    type: Literal["get-import-suggestions"]
    prefix: str = ""

    def to_event(self) -> InboundEvent:
        return GetImportSuggestions(self.prefix)


class CanGoToDefinitionMessage(_Message):
    type: Literal["can-go-to-definition"]
    token: str = ""

    def to_event(self) -> InboundEvent:
        return CanGoToDefinition(self.token)


class GetImportersForTokenMessage(_Message):
    type: Literal["get-importers-for-token"]
    project_directory: str | None = None
    token: str | None = None

    def to_event(self) -> InboundEvent:
        return GetImportersForToken(self.project_directory, self.token)


InboundMessage = Annotated[
    ActiveTokenChangedMessage
    | ActiveFileChangedMessage
    | FileContentsChangedMessage
    | FileContentsRemovedMessage
    | PackagesNeededMessage
    | GoToDefinitionMessage
    | GoToSymbolMessage
    | GetHintsForPartialMessage
    | GetImportSuggestionsMessage
    | CanGoToDefinitionMessage
    | GetImportersForTokenMessage,
    Field(discriminator="type"),
]

_INBOUND: TypeAdapter[Any] = TypeAdapter(InboundMessage)


def decode_message(raw: str | bytes) -> InboundEvent:
    """Decode one JSON line into an inbound event.

    Raises:
        ProtocolError: If the line is not a known, well-formed message.
    """
    try:
        message = _INBOUND.validate_json(raw)
    except ValidationError as e:
        err = e.errors()[0]
        location = ".".join(str(loc) for loc in err["loc"])
        raise ProtocolError.invalid_message(err["msg"], location=location) from e
    return message.to_event()  # type: ignore[no-any-return]


def encode_event(event: OutboundEvent) -> dict[str, Any]:
    """Outbound event as a JSON-ready dict with its ``type`` tag."""
    return {"type": event.TYPE, **dataclasses.asdict(event)}


def encode_event_json(event: OutboundEvent) -> str:
    return json.dumps(encode_event(event), separators=(",", ":"))
