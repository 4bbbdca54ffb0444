from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from apidocu.domain.models import EndpointRule, FieldDefinition, HandlerDescriptor
from apidocu.registry.endpoints import EndpointRegistry
from apidocu.registry.resolver import InMemoryHandlerResolver


class SnapshotError(Exception):
    """Raised when a registry snapshot cannot be read or parsed."""


class BlossomEntry(BaseModel):
    group: str
    name: str
    comment: str = ""
    input: list[FieldDefinition] = Field(default_factory=list)
    output: list[FieldDefinition] = Field(default_factory=list)


class TreeEntry(BaseModel):
    name: str
    comment: str = ""
    fields: list[FieldDefinition] = Field(default_factory=list)


class SnapshotFile(BaseModel):
    """
    On-disk form of a host registry:

        {
          "component": "misaka",
          "endpoints": [{"path": ..., "method": "GET",
                         "handler": {"kind": "blossom", "group": ..., "name": ...}}],
          "blossoms": [{"group": ..., "name": ..., "comment": ..., "input": [...], "output": [...]}],
          "trees": [{"name": ..., "comment": ..., "fields": [...]}]
        }
    """

    component: Optional[str] = None
    endpoints: list[EndpointRule] = Field(default_factory=list)
    blossoms: list[BlossomEntry] = Field(default_factory=list)
    trees: list[TreeEntry] = Field(default_factory=list)


@dataclass(frozen=True)
class Snapshot:
    component: Optional[str]
    registry: EndpointRegistry
    resolver: InMemoryHandlerResolver


def _by_name(fields: list[FieldDefinition]) -> dict[str, FieldDefinition]:
    return {f.name: f for f in fields}


def build_snapshot(data: SnapshotFile) -> Snapshot:
    registry = EndpointRegistry(data.endpoints)
    resolver = InMemoryHandlerResolver()

    for b in data.blossoms:
        resolver.register_blossom(
            b.group,
            b.name,
            HandlerDescriptor(
                comment=b.comment,
                input_fields=_by_name(b.input),
                output_fields=_by_name(b.output),
            ),
        )
    for t in data.trees:
        resolver.register_tree(t.name, t.comment, _by_name(t.fields))

    return Snapshot(component=data.component, registry=registry, resolver=resolver)


def parse_snapshot(text: str) -> Snapshot:
    try:
        data = SnapshotFile.model_validate_json(text)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot: {exc}") from exc
    return build_snapshot(data)


def load_snapshot(path: Path) -> Snapshot:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
    return parse_snapshot(text)
