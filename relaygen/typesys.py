"""Registry of named types, keyed by (namespace, name)."""

from __future__ import annotations

import logging

from .errors import DuplicateTypeError, FrozenTypeSystemError, UnknownTypeError
from .types import Type, resolve

logger = logging.getLogger(__name__)


class TypeSystem:
    """Append-only catalog of types for one generation run.

    Populate it, then freeze it before generating; a frozen catalog can be
    shared read-only between generators.
    """

    def __init__(self) -> None:
        self._types: dict[tuple[str, str], Type] = {}
        self._frozen = False

    def register(self, namespace: str, name: str, typ: Type) -> Type:
        if self._frozen:
            raise FrozenTypeSystemError(
                "cannot register '" + name + "': type system is frozen"
            )
        key = (namespace, name)
        if key in self._types:
            raise DuplicateTypeError(namespace, name)
        self._types[key] = typ
        logger.debug("registered %s.%s (%s)", namespace, name, typ.kind)
        return typ

    def lookup(self, namespace: str, name: str) -> Type:
        typ = self._types.get((namespace, name))
        if typ is None:
            raise UnknownTypeError(namespace, name)
        return typ

    def resolve(self, namespace: str, name: str) -> Type:
        """Look up a type and strip its alias/reference chain."""
        return resolve(self.lookup(namespace, name))

    def names(self, namespace: str) -> list[str]:
        """Registered names in a namespace, in registration order."""
        return [name for ns, name in self._types if ns == namespace]

    def namespaces(self) -> list[str]:
        out: list[str] = []
        for ns, _ in self._types:
            if ns not in out:
                out.append(ns)
        return out

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: object) -> bool:
        return key in self._types

    def __len__(self) -> int:
        return len(self._types)
