"""Ordered content providers.

A chain asks each provider in turn and keeps the first non-empty answer, so
fallbacks such as "AI bullets, else the user's own description" are spelled
out in one place instead of nested conditionals.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Tuple

LOG = logging.getLogger(__name__)


@dataclass
class ProviderChain:
    name: str
    providers: List[Tuple[str, Callable[[], Any]]] = field(default_factory=list)

    def add(self, label: str, provider: Callable[[], Any]) -> "ProviderChain":
        self.providers.append((label, provider))
        return self

    def resolve(self, default: Any = None) -> Tuple[str, Any]:
        """Return ``(label, value)`` of the first provider with a non-empty value."""
        for label, provider in self.providers:
            value = provider()
            if value:
                LOG.debug("%s: using %s", self.name, label)
                return label, value
        LOG.debug("%s: no provider produced content", self.name)
        return "", default

    def value(self, default: Any = None) -> Any:
        return self.resolve(default)[1]
