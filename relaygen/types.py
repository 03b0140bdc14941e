"""Type model for service descriptions.

The variants form a tree (a graph once references are bound). Alias and
Reference are transparent wrappers: `resolve` strips them to reach the
underlying structural type. Everything else in the package dispatches on the
resolved variant.

    Alias/Reference -> ... -> Primitive | Record | Tuple | Map | List | Function
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .errors import ResolutionError


# ============================================================
# VARIANTS
# ============================================================


@dataclass(eq=False)
class Type:
    """Base for all types. Abstract."""

    kind: ClassVar[str] = "type"


@dataclass(unsafe_hash=True)
class Primitive(Type):
    """Named scalar: string, int, bool, float, ...

    The name doubles as the writer key (`Write_<name>`).
    """

    kind: ClassVar[str] = "primitive"

    name: str


@dataclass(eq=False, repr=False)
class Alias(Type):
    """Named synonym for `target`.

    Compared and hashed by identity, since alias graphs may be cyclic.
    """

    kind: ClassVar[str] = "alias"

    name: str
    target: Type | None = None

    def bind(self, target: Type) -> Alias:
        self.target = target
        return self

    def __repr__(self) -> str:
        return "Alias(" + repr(self.name) + ")"


@dataclass(eq=False, repr=False)
class Reference(Type):
    """Named indirection to another type, typically a registered record.

    May be created unbound and bound once the target is known (forward and
    recursive references). Compared and hashed by identity.
    """

    kind: ClassVar[str] = "reference"

    name: str
    target: Type | None = None

    def bind(self, target: Type) -> Reference:
        self.target = target
        return self

    def __repr__(self) -> str:
        return "Reference(" + repr(self.name) + ")"


@dataclass
class Record(Type):
    """Named structure. A service is a record whose fields are Functions.

    Invariants:
    - field order is declaration order
    """

    kind: ClassVar[str] = "record"

    name: str
    fields: dict[str, Type] = field(default_factory=dict)


@dataclass
class Tuple(Type):
    """Fixed-arity heterogeneous group."""

    kind: ClassVar[str] = "tuple"

    elements: list[Type] = field(default_factory=list)


@dataclass
class Map(Type):
    kind: ClassVar[str] = "map"

    key: Type
    value: Type


@dataclass
class List(Type):
    kind: ClassVar[str] = "list"

    element: Type


@dataclass
class Function(Type):
    """Operation signature.

    Invariants:
    - inputs are in declared parameter order
    """

    kind: ClassVar[str] = "function"

    inputs: list[Type] = field(default_factory=list)
    outputs: list[Type] = field(default_factory=list)

    @property
    def num_inputs(self) -> int:
        return len(self.inputs)

    @property
    def num_outputs(self) -> int:
        return len(self.outputs)


# ============================================================
# RESOLUTION
# ============================================================


def is_wrapper(t: Type) -> bool:
    return isinstance(t, (Alias, Reference))


def resolve(t: Type) -> Type:
    """Follow Alias/Reference wrappers to the first structural type.

    A chain of L wrappers takes L+1 steps. Revisiting a node raises
    ResolutionError with cycle_detected set.
    """
    seen: set[int] = set()
    current = t
    while is_wrapper(current):
        if id(current) in seen:
            raise ResolutionError(current.name, cycle_detected=True)
        seen.add(id(current))
        if current.target is None:
            raise ResolutionError(current.name, cycle_detected=False)
        current = current.target
    return current


# ============================================================
# SIGNATURES
# ============================================================


def signature(t: Type) -> str:
    """Neutral signature of a type, as written in argument lists.

    Named types keep their own name (aliases and references are not resolved).
    """
    match t:
        case Primitive(name=name):
            return name
        case Alias(name=name) | Reference(name=name) | Record(name=name):
            return name
        case List(element=element):
            return "[]" + signature(element)
        case Map(key=key, value=value):
            return "map[" + signature(key) + "]" + signature(value)
        case Tuple(elements=elements):
            return "(" + ", ".join(signature(e) for e in elements) + ")"
        case Function(inputs=inputs, outputs=outputs):
            out = "func(" + ", ".join(signature(p) for p in inputs) + ")"
            if len(outputs) == 1:
                out += " " + signature(outputs[0])
            elif len(outputs) > 1:
                out += " (" + ", ".join(signature(r) for r in outputs) + ")"
            return out
        case _:
            raise TypeError("not a relaygen type: " + type(t).__name__)
