"""Writer dispatch: which serialization routine writes a value of a type.

| Resolved type    | Writer            |
|------------------|-------------------|
| Primitive(name)  | Write_<name>      |
| Record(name, _)  | Write_<name>      |
| Map(_, _)        | Write_Map         |
| List(_)          | Write_List        |
| Tuple(_)         | UnsupportedType   |
| Function(_, _)   | UnsupportedType   |

Map and List share one generic writer regardless of element types.
"""

from __future__ import annotations

from .errors import UnsupportedTypeError
from .types import Function, List, Map, Primitive, Record, Tuple, Type, resolve

WRITER_PREFIX: str = "Write_"


def writer_name_for(t: Type) -> str:
    match resolve(t):
        case Primitive(name=name):
            return WRITER_PREFIX + name
        case Record(name=name):
            return WRITER_PREFIX + name
        case Map():
            return WRITER_PREFIX + "Map"
        case List():
            return WRITER_PREFIX + "List"
        case Tuple():
            raise UnsupportedTypeError("tuple")
        case Function():
            raise UnsupportedTypeError("function")
        case other:
            raise TypeError("not a relaygen type: " + type(other).__name__)


def writer_call(t: Type, body: str, arg: str) -> str:
    """Render `Write_X(body, arg)` for an argument of type `t`."""
    return writer_name_for(t) + "(" + body + ", " + arg + ")"
