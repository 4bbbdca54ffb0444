from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

from apidocu.domain.models import (
    CompositeHandler,
    DirectHandler,
    EndpointRule,
    FieldDefinition,
    HandlerDescriptor,
)

logger = logging.getLogger(__name__)


class HandlerResolver(Protocol):
    """Lookup of handler metadata owned by the host's validation layer."""

    def resolve(self, group: str, name: str) -> Optional[HandlerDescriptor]:
        ...

    def resolve_composite(self, name: str) -> Optional[HandlerDescriptor]:
        ...


class InMemoryHandlerResolver:
    def __init__(self) -> None:
        self._blossoms: dict[tuple[str, str], HandlerDescriptor] = {}
        self._trees: dict[str, HandlerDescriptor] = {}

    def register_blossom(self, group: str, name: str, descriptor: HandlerDescriptor) -> None:
        self._blossoms[(group, name)] = descriptor

    def register_tree(
        self,
        name: str,
        comment: str,
        fields: Mapping[str, FieldDefinition],
    ) -> None:
        self._trees[name] = HandlerDescriptor.composite(comment, fields)

    def resolve(self, group: str, name: str) -> Optional[HandlerDescriptor]:
        return self._blossoms.get((group, name))

    def resolve_composite(self, name: str) -> Optional[HandlerDescriptor]:
        return self._trees.get(name)


def resolve_rule(resolver: HandlerResolver, rule: EndpointRule) -> Optional[HandlerDescriptor]:
    """
    Resolve the handler behind an endpoint rule.

    Returns None when the handler is unknown. A resolver that raises is
    treated the same way so one broken entry cannot abort a render.
    """
    handler = rule.handler
    try:
        if isinstance(handler, DirectHandler):
            return resolver.resolve(handler.group, handler.name)
        if isinstance(handler, CompositeHandler):
            return resolver.resolve_composite(handler.name)
    except Exception:
        logger.exception(
            "resolver failed for %s %s (handler %r)",
            rule.method.value,
            rule.path,
            handler.name,
        )
        return None

    logger.warning("unknown handler kind for %s %s", rule.method.value, rule.path)
    return None
