"""Errors raised while building type systems and generating client stubs."""

from __future__ import annotations


class GenerationError(Exception):
    """Base error for relaygen."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


# ============================================================
# TYPE SYSTEM
# ============================================================


class UnknownTypeError(GenerationError):
    def __init__(self, namespace: str, name: str):
        super().__init__("unknown type '" + _qualified(namespace, name) + "'")
        self.namespace = namespace
        self.name = name


class DuplicateTypeError(GenerationError):
    def __init__(self, namespace: str, name: str):
        super().__init__("type '" + _qualified(namespace, name) + "' already registered")
        self.namespace = namespace
        self.name = name


class FrozenTypeSystemError(GenerationError):
    """Registration attempted after generation started."""


class ResolutionError(GenerationError):
    """An alias/reference chain that cannot be resolved.

    `cycle_detected` is True when the chain revisits a node, False when it ends
    in a reference that was never bound.
    """

    def __init__(self, name: str, cycle_detected: bool):
        if cycle_detected:
            msg = "cycle detected while resolving '" + name + "'"
        else:
            msg = "reference '" + name + "' is not bound to a type"
        super().__init__(msg)
        self.name = name
        self.cycle_detected = cycle_detected


# ============================================================
# GENERATION
# ============================================================


class NotARecordError(GenerationError):
    def __init__(self, name: str, kind: str):
        super().__init__("'" + name + "' is a " + kind + ", not a record")
        self.name = name
        self.kind = kind


class NotAFunctionError(GenerationError):
    def __init__(self, name: str, kind: str):
        super().__init__("operation '" + name + "' is a " + kind + ", not a function")
        self.name = name
        self.kind = kind


class UnsupportedTypeError(GenerationError):
    """No writer exists for an argument of this kind."""

    def __init__(self, kind: str):
        super().__init__(kind + " types cannot be written to a request body")
        self.kind = kind


class InvalidBindingError(GenerationError):
    """Malformed or conflicting HTTP binding."""


class TemplateRenderError(GenerationError):
    """A template failed to load or render."""


class SchemaError(GenerationError):
    """Malformed schema document."""


def _qualified(namespace: str, name: str) -> str:
    if namespace == "":
        return name
    return namespace + "." + name
