from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from apidocu.domain.models import EndpointRule, HttpMethod


@dataclass
class EndpointRegistry:
    """Endpoint rules keyed by path, then by HTTP method.

    Iteration is deterministic: paths ascending, methods in
    GET/POST/PUT/DELETE order.
    """

    rules: dict[str, dict[HttpMethod, EndpointRule]]

    def __init__(self, rules: Iterable[EndpointRule] = ()) -> None:
        self.rules = {}
        for rule in rules:
            self.add_rule(rule)

    def add_rule(self, rule: EndpointRule) -> None:
        # last registration for a path+method wins
        self.rules.setdefault(rule.path, {})[rule.method] = rule

    def get(self, path: str, method: HttpMethod) -> Optional[EndpointRule]:
        return self.rules.get(path, {}).get(method)

    def paths(self) -> list[str]:
        return sorted(self.rules.keys())

    def rules_for(self, path: str) -> list[EndpointRule]:
        by_method = self.rules.get(path, {})
        return [by_method[m] for m in sorted(by_method, key=lambda m: m.rank)]

    def iter_rules(self) -> Iterator[EndpointRule]:
        for path in self.paths():
            yield from self.rules_for(path)

    def __len__(self) -> int:
        return sum(len(by_method) for by_method in self.rules.values())

    def __contains__(self, path: object) -> bool:
        return path in self.rules
