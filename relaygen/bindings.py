"""HTTP transport metadata per service operation.

Operations without an entry get DEFAULT_BINDING, whose endpoint is the
UNRESOLVED_ENDPOINT sentinel. Generated code carries the sentinel verbatim so
unconfigured operations are easy to find in the output.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from .errors import InvalidBindingError

Placement = Literal["path", "query", "body"]
"""Where an operation's parameters travel in the HTTP request."""

HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}
)
PLACEMENTS: frozenset[str] = frozenset({"path", "query", "body"})

UNRESOLVED_ENDPOINT: str = "<unresolved-endpoint>"


@dataclass(frozen=True)
class HttpBinding:
    """Verb, endpoint template and parameter placement for one operation."""

    method: str = "GET"
    endpoint_template: str = UNRESOLVED_ENDPOINT
    placement: Placement = "body"

    def __post_init__(self) -> None:
        if self.method not in HTTP_METHODS:
            raise InvalidBindingError("unknown HTTP method " + repr(self.method))
        if self.placement not in PLACEMENTS:
            raise InvalidBindingError("unknown parameter placement " + repr(self.placement))

    @property
    def is_resolved(self) -> bool:
        return self.endpoint_template != UNRESOLVED_ENDPOINT


DEFAULT_BINDING = HttpBinding()


class BindingTable:
    """Operation name -> HttpBinding, with defaults for missing entries."""

    def __init__(self, bindings: Mapping[str, HttpBinding] | None = None) -> None:
        self._bindings: dict[str, HttpBinding] = {}
        if bindings is not None:
            for name, binding in bindings.items():
                self.add(name, binding)

    def add(self, operation_name: str, binding: HttpBinding) -> None:
        if operation_name in self._bindings:
            raise InvalidBindingError("operation '" + operation_name + "' is already bound")
        self._bindings[operation_name] = binding

    def binding_for(self, operation_name: str) -> HttpBinding:
        return self._bindings.get(operation_name, DEFAULT_BINDING)

    def is_bound(self, operation_name: str) -> bool:
        return operation_name in self._bindings

    def __contains__(self, operation_name: object) -> bool:
        return operation_name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
