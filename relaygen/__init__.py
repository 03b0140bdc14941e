"""relaygen: type-directed HTTP client stub generator. Public API."""

from __future__ import annotations

from .bindings import DEFAULT_BINDING, UNRESOLVED_ENDPOINT, BindingTable, HttpBinding
from .errors import (
    DuplicateTypeError,
    FrozenTypeSystemError,
    GenerationError,
    InvalidBindingError,
    NotAFunctionError,
    NotARecordError,
    ResolutionError,
    SchemaError,
    TemplateRenderError,
    UnknownTypeError,
    UnsupportedTypeError,
)
from .generator import (
    EmitState,
    GenerationContext,
    Generator,
    GeneratorConfig,
    OperationFailure,
    generate,
)
from .schema import Schema, load_schema, load_schema_data
from .targets import ArgumentRenderer, arg_list_maker, python_arg_list_maker
from .types import (
    Alias,
    Function,
    List,
    Map,
    Primitive,
    Record,
    Reference,
    Tuple,
    Type,
    resolve,
    signature,
)
from .typesys import TypeSystem
from .writers import writer_name_for

__all__ = [
    "Alias",
    "ArgumentRenderer",
    "BindingTable",
    "DEFAULT_BINDING",
    "DuplicateTypeError",
    "EmitState",
    "FrozenTypeSystemError",
    "Function",
    "GenerationContext",
    "GenerationError",
    "Generator",
    "GeneratorConfig",
    "HttpBinding",
    "InvalidBindingError",
    "List",
    "Map",
    "NotAFunctionError",
    "NotARecordError",
    "OperationFailure",
    "Primitive",
    "Record",
    "Reference",
    "ResolutionError",
    "Schema",
    "SchemaError",
    "TemplateRenderError",
    "Tuple",
    "Type",
    "TypeSystem",
    "UNRESOLVED_ENDPOINT",
    "UnknownTypeError",
    "UnsupportedTypeError",
    "arg_list_maker",
    "generate",
    "load_schema",
    "load_schema_data",
    "python_arg_list_maker",
    "resolve",
    "signature",
    "writer_name_for",
]
