"""Output targets: template set plus argument renderer per language."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .errors import GenerationError
from .types import Alias, Function, List, Map, Primitive, Record, Reference, Tuple, Type, signature


class ArgumentRenderer(Protocol):
    """Renders an operation's parameter list for a target language."""

    def __call__(self, types: Sequence[Type], with_names: bool) -> str: ...


def arg_list_maker(types: Sequence[Type], with_names: bool) -> str:
    """`arg0 T0, arg1 T1` (or `T0, T1` without names), using neutral signatures."""
    parts: list[str] = []
    for index, param in enumerate(types):
        if with_names:
            parts.append("arg" + str(index) + " " + signature(param))
        else:
            parts.append(signature(param))
    return ", ".join(parts)


# ============================================================
# PYTHON
# ============================================================

_PYTHON_PRIMITIVES: dict[str, str] = {
    "string": "str",
    "str": "str",
    "int": "int",
    "int32": "int",
    "int64": "int",
    "integer": "int",
    "uint": "int",
    "float": "float",
    "float32": "float",
    "float64": "float",
    "double": "float",
    "bool": "bool",
    "boolean": "bool",
    "bytes": "bytes",
    "byte": "int",
    "any": "Any",
}


def python_type(t: Type) -> str:
    """Python annotation for a type (named types keep their own name)."""
    match t:
        case Primitive(name=name):
            return _PYTHON_PRIMITIVES.get(name, name)
        case Alias(name=name) | Reference(name=name) | Record(name=name):
            return name
        case List(element=element):
            return "list[" + python_type(element) + "]"
        case Map(key=key, value=value):
            return "dict[" + python_type(key) + ", " + python_type(value) + "]"
        case Tuple(elements=elements):
            if not elements:
                return "tuple[()]"
            return "tuple[" + ", ".join(python_type(e) for e in elements) + "]"
        case Function(inputs=inputs, outputs=outputs):
            params = "[" + ", ".join(python_type(p) for p in inputs) + "]"
            if len(outputs) == 0:
                ret = "None"
            elif len(outputs) == 1:
                ret = python_type(outputs[0])
            else:
                ret = "tuple[" + ", ".join(python_type(r) for r in outputs) + "]"
            return "Callable[" + params + ", " + ret + "]"
        case _:
            raise TypeError("not a relaygen type: " + type(t).__name__)


def python_arg_list_maker(types: Sequence[Type], with_names: bool) -> str:
    """`arg0: str, arg1: Team` (or `str, Team` without names)."""
    parts: list[str] = []
    for index, param in enumerate(types):
        if with_names:
            parts.append("arg" + str(index) + ": " + python_type(param))
        else:
            parts.append(python_type(param))
    return ", ".join(parts)


# ============================================================
# TARGET TABLE
# ============================================================


@dataclass(frozen=True)
class Target:
    """Configuration for an output language.

    Templates live in `templates/<name>/` and are named
    `client.<ext>.jinja`, `method_start.<ext>.jinja`,
    `method_body.<ext>.jinja` and `method_end.<ext>.jinja`.
    """

    name: str
    ext: str
    renderer: ArgumentRenderer
    transport_request: str

    def template(self, part: str) -> str:
        return self.name + "/" + part + "." + self.ext + ".jinja"


TARGETS: dict[str, Target] = {
    "go": Target(
        name="go",
        ext="go",
        renderer=arg_list_maker,
        transport_request="*http.Request",
    ),
    "python": Target(
        name="python",
        ext="py",
        renderer=python_arg_list_maker,
        transport_request="requests.Request",
    ),
}


def get_target(name: str) -> Target:
    target = TARGETS.get(name)
    if target is None:
        raise GenerationError(
            "unknown target '" + name + "' (expected one of: " + ", ".join(sorted(TARGETS)) + ")"
        )
    return target
