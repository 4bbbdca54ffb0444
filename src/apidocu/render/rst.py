from __future__ import annotations

import logging
from typing import Mapping, Optional

from apidocu.domain.models import (
    EndpointRule,
    FieldDefinition,
    FieldType,
    HandlerDescriptor,
    value_to_string,
)
from apidocu.registry.endpoints import EndpointRegistry
from apidocu.registry.resolver import HandlerResolver, resolve_rule

logger = logging.getLogger(__name__)


class DocBuilder:
    """Append-only text sink. One instance per rendered document."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, text: str) -> None:
        self._parts.append(text)

    def heading(self, title: str, char: str) -> None:
        self.append(f"{title}\n{char * len(title)}\n")

    def attribute(self, label: str, value: str) -> None:
        self.append(f"    **{label}:**\n")
        self.append(f"        ``{value}``\n")

    def getvalue(self) -> str:
        return "".join(self._parts)


def render_field(doc: DocBuilder, field: FieldDefinition, is_request_side: bool) -> None:
    """
    Append the documentation block of one field.

    Response-side fields only carry name, description and type; the
    constraint attributes describe what a caller may send.
    """
    doc.append("\n")
    doc.append(f"``{field.name}``\n")

    if field.comment:
        doc.attribute("Description", field.comment)

    doc.attribute("Type", field.type.value)

    if not is_request_side:
        return

    doc.attribute("Required", "True" if field.is_required else "False")

    if field.default_value is not None and not field.is_required:
        doc.attribute("Default", value_to_string(field.default_value))

    if field.match_value is not None:
        doc.attribute("Does have the value", value_to_string(field.match_value))

    if field.regex:
        doc.attribute("Must match the regex", field.regex)

    if field.lower_bound != 0 or field.upper_bound != 0:
        if field.type == FieldType.INT:
            doc.attribute("Lower border of value", str(field.lower_bound))
            doc.attribute("Upper border of value", str(field.upper_bound))
        elif field.type == FieldType.STRING:
            doc.attribute("Minimum string-length", str(field.lower_bound))
            doc.attribute("Maximum string-length", str(field.upper_bound))


def render_fields(
    doc: DocBuilder,
    fields: Mapping[str, FieldDefinition],
    is_request_side: bool,
) -> None:
    # keyed by name; sorting keeps output diffable
    for name in sorted(fields):
        render_field(doc, fields[name], is_request_side)


def render_handler(doc: DocBuilder, descriptor: HandlerDescriptor) -> None:
    doc.append(descriptor.comment + "\n")

    doc.append("\n")
    doc.heading("Request-Parameter", "~")
    render_fields(doc, descriptor.input_fields, is_request_side=True)

    doc.append("\n")
    doc.heading("Response-Parameter", "~")
    render_fields(doc, descriptor.output_fields, is_request_side=False)


def render_endpoints(
    doc: DocBuilder,
    registry: EndpointRegistry,
    resolver: HandlerResolver,
    unresolved: Optional[list[EndpointRule]] = None,
) -> None:
    doc.append("\n")

    for path in registry.paths():
        doc.heading(path, "-")

        for rule in registry.rules_for(path):
            doc.append("\n")
            doc.heading(rule.method.value, "^")
            doc.append("\n")

            descriptor = resolve_rule(resolver, rule)
            if descriptor is None:
                logger.warning(
                    "no handler found for %s %s (group=%r, name=%r); skipping field details",
                    rule.method.value,
                    rule.path,
                    rule.group_name,
                    rule.handler_name,
                )
                if unresolved is not None:
                    unresolved.append(rule)
                continue

            render_handler(doc, descriptor)


def render(
    component_name: str,
    registry: EndpointRegistry,
    resolver: HandlerResolver,
    unresolved: Optional[list[EndpointRule]] = None,
) -> str:
    """
    Render the full RST API reference of a component.

    Deterministic for a given registry/resolver snapshot. Rules whose handler
    cannot be resolved keep their headings and are appended to `unresolved`
    when a list is passed.
    """
    doc = DocBuilder()
    # underline follows the original name length, not the upper-cased one
    doc.append(component_name.upper() + "\n")
    doc.append("=" * len(component_name) + "\n")

    render_endpoints(doc, registry, resolver, unresolved=unresolved)
    return doc.getvalue()
