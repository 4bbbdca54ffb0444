from __future__ import annotations

import json
from enum import Enum
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FieldType(str, Enum):
    MAP = "Map"
    ARRAY = "Array"
    BOOL = "Bool"
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def rank(self) -> int:
        # declaration order, not alphabetical
        return list(HttpMethod).index(self)


class FieldDefinition(BaseModel):
    """Validation metadata of one named input or output value."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: FieldType
    comment: str = ""
    is_required: bool = False
    default_value: Optional[Any] = None
    match_value: Optional[Any] = None
    regex: str = ""
    lower_bound: int = 0
    upper_bound: int = 0


class DirectHandler(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["blossom"] = "blossom"
    group: str
    name: str


class CompositeHandler(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["tree"] = "tree"
    name: str


HandlerRef = Union[DirectHandler, CompositeHandler]


class EndpointRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    method: HttpMethod
    handler: HandlerRef = Field(discriminator="kind")

    @property
    def group_name(self) -> str:
        if isinstance(self.handler, DirectHandler):
            return self.handler.group
        return ""

    @property
    def handler_name(self) -> str:
        return self.handler.name


class HandlerDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    comment: str = ""
    input_fields: dict[str, FieldDefinition] = Field(default_factory=dict)
    output_fields: dict[str, FieldDefinition] = Field(default_factory=dict)

    @classmethod
    def composite(cls, comment: str, fields: Mapping[str, FieldDefinition]) -> "HandlerDescriptor":
        # trees expose one merged map for both directions
        return cls(comment=comment, input_fields=dict(fields), output_fields=dict(fields))


def value_to_string(value: Any) -> str:
    """Stringify a default/match value the way the host prints data items."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        # maps print key-sorted; nested unknown objects fall back to str()
        return json.dumps(value, separators=(",", ":"), sort_keys=True, default=str)
    return str(value)
