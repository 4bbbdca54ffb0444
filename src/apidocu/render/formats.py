from __future__ import annotations

import base64
import logging
from enum import Enum
from typing import Optional

from apidocu.domain.models import EndpointRule
from apidocu.registry.endpoints import EndpointRegistry
from apidocu.registry.resolver import HandlerResolver
from apidocu.render.rst import render

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    RST = "rst"
    PDF = "pdf"
    MD = "md"


# PDF is produced downstream from the RST text
RST_BASED_FORMATS = frozenset({OutputFormat.RST, OutputFormat.PDF})


def parse_output_format(text: Optional[str]) -> Optional[OutputFormat]:
    value = (text or "").strip().lower()
    try:
        return OutputFormat(value)
    except ValueError:
        return None


def render_document(
    output_type: Optional[str],
    component_name: str,
    registry: EndpointRegistry,
    resolver: HandlerResolver,
    unresolved: Optional[list[EndpointRule]] = None,
) -> str:
    """Render the plain document for a requested type; "" if the type is not implemented."""
    fmt = parse_output_format(output_type)
    if fmt is None or fmt not in RST_BASED_FORMATS:
        logger.info("documentation type %r is not supported; returning empty document", output_type)
        return ""
    return render(component_name, registry, resolver, unresolved=unresolved)


def encode_document(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_document(payload: str) -> str:
    return base64.b64decode(payload.encode("ascii")).decode("utf-8")


def generate_documentation(
    output_type: Optional[str],
    component_name: str,
    registry: EndpointRegistry,
    resolver: HandlerResolver,
) -> str:
    return encode_document(render_document(output_type, component_name, registry, resolver))
