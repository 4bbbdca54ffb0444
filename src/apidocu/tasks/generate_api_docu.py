from __future__ import annotations

import logging
from typing import Any, Mapping

from apidocu.config import Settings
from apidocu.domain.models import (
    DirectHandler,
    EndpointRule,
    FieldDefinition,
    FieldType,
    HandlerDescriptor,
    HttpMethod,
)
from apidocu.registry.endpoints import EndpointRegistry
from apidocu.registry.resolver import HandlerResolver, InMemoryHandlerResolver
from apidocu.render.formats import generate_documentation

logger = logging.getLogger(__name__)

ROUTE_PATH = "v1/documentation/api"
ROUTE_METHOD = HttpMethod.GET
GROUP_NAME = "-"
HANDLER_NAME = "get_api_documentation"

TASK_COMMENT = "Generate a user-specific documentation for the API of the current component."

INPUT_FIELDS: dict[str, FieldDefinition] = {
    "type": FieldDefinition(
        name="type",
        type=FieldType.STRING,
        comment="Output-type of the document (pdf, rst, md).",
        is_required=False,
        default_value="pdf",
    ),
}

OUTPUT_FIELDS: dict[str, FieldDefinition] = {
    "documentation": FieldDefinition(
        name="documentation",
        type=FieldType.STRING,
        comment="API-documentation as base64 converted string.",
    ),
}


def descriptor() -> HandlerDescriptor:
    return HandlerDescriptor(
        comment=TASK_COMMENT,
        input_fields=dict(INPUT_FIELDS),
        output_fields=dict(OUTPUT_FIELDS),
    )


def register(registry: EndpointRegistry, resolver: InMemoryHandlerResolver) -> EndpointRule:
    """Expose the task at GET v1/documentation/api so it appears in its own output."""
    rule = EndpointRule(
        path=ROUTE_PATH,
        method=ROUTE_METHOD,
        handler=DirectHandler(group=GROUP_NAME, name=HANDLER_NAME),
    )
    registry.add_rule(rule)
    resolver.register_blossom(GROUP_NAME, HANDLER_NAME, descriptor())
    return rule


class GenerateApiDocu:
    """Host task returning the component's API reference as base64 text."""

    comment = TASK_COMMENT
    input_fields = INPUT_FIELDS
    output_fields = OUTPUT_FIELDS

    def __init__(
        self,
        settings: Settings,
        registry: EndpointRegistry,
        resolver: HandlerResolver,
    ) -> None:
        self.settings = settings
        self.registry = registry
        self.resolver = resolver

    def run_task(self, inputs: Mapping[str, Any]) -> dict[str, str]:
        output_type = inputs.get("type")
        if output_type is None:
            output_type = INPUT_FIELDS["type"].default_value

        try:
            documentation = generate_documentation(
                str(output_type),
                self.settings.component_name,
                self.registry,
                self.resolver,
            )
        except Exception:
            # the surrounding request must not fail because of the docs
            logger.exception("documentation rendering failed; returning empty document")
            documentation = ""

        return {"documentation": documentation}
