"""Load a type system and binding table from a JSON or YAML schema document.

    namespaces:
      chat:
        Team: {record: {id: string, name: string}}
        TeamId: {alias: string}
        TeamService:
          record:
            CreateTeam: {function: {inputs: [{ref: Team}], outputs: [{ref: Team}]}}
    bindings:
      CreateTeam: {method: POST, endpoint: /teams/, placement: body}

Type expressions:
- "name"                     primitive
- {ref: Name} / {ref: ns.Name}  reference to a declared type
- {alias: T}                 alias, named after its declaration key
- {record: {field: T, ...}}  record, named after its declaration key
- {list: T}, {map: [K, V]}, {tuple: [T, ...]}
- {function: {inputs: [...], outputs: [...]}}

Nested aliases and records need an explicit `name` key. References are bound
in a second pass, once every declaration is registered, so declaration order
does not matter and records may refer to themselves.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from .bindings import UNRESOLVED_ENDPOINT, BindingTable, HttpBinding
from .errors import SchemaError
from .types import Alias, Function, List, Map, Primitive, Record, Reference, Tuple, Type
from .typesys import TypeSystem

logger = logging.getLogger(__name__)

_KINDS: tuple[str, ...] = ("ref", "alias", "record", "list", "map", "tuple", "function")


@dataclass
class Schema:
    type_system: TypeSystem
    bindings: BindingTable
    default_namespace: str


def load_schema(path: str | Path) -> Schema:
    """Read a schema file; `.yml`/`.yaml` are parsed as YAML, anything else as JSON."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError("cannot read '" + str(path) + "': " + str(e)) from e
    except UnicodeDecodeError as e:
        raise SchemaError("cannot decode '" + str(path) + "' as UTF-8: " + str(e)) from e
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, ValueError) as e:
        raise SchemaError("cannot parse '" + str(path) + "': " + str(e)) from e
    return load_schema_data(data)


def load_schema_data(data: object) -> Schema:
    if not isinstance(data, dict):
        raise SchemaError("schema must be a mapping")
    namespaces = data.get("namespaces")
    if not isinstance(namespaces, dict) or not namespaces:
        raise SchemaError("schema needs a non-empty 'namespaces' mapping")
    loader = _Loader()
    for namespace, decls in namespaces.items():
        if not isinstance(decls, dict):
            raise SchemaError("namespace '" + str(namespace) + "' must be a mapping")
        for name, expr in decls.items():
            typ = loader.declare(str(namespace), str(name), expr)
            loader.type_system.register(str(namespace), str(name), typ)
    loader.bind_references()
    bindings = _load_bindings(data.get("bindings", {}))
    return Schema(
        type_system=loader.type_system,
        bindings=bindings,
        default_namespace=str(next(iter(namespaces))),
    )


class _Loader:
    def __init__(self) -> None:
        self.type_system = TypeSystem()
        self.pending: list[tuple[str, Reference]] = []

    def declare(self, namespace: str, name: str, expr: object) -> Type:
        """Build a top-level declaration; aliases and records take the key as name."""
        if isinstance(expr, dict) and len(expr) == 1:
            if "alias" in expr:
                return Alias(name, self.build(namespace, expr["alias"]))
            if "record" in expr:
                return self._record(namespace, name, expr["record"])
        return self.build(namespace, expr)

    def build(self, namespace: str, expr: object) -> Type:
        if isinstance(expr, str):
            return Primitive(expr)
        if not isinstance(expr, dict):
            raise SchemaError("invalid type expression: " + repr(expr))
        kinds = [k for k in _KINDS if k in expr]
        if len(kinds) != 1:
            raise SchemaError("type expression needs exactly one of " + ", ".join(_KINDS) + ": " + repr(expr))
        kind = kinds[0]
        body = expr[kind]
        if kind == "ref":
            if not isinstance(body, str):
                raise SchemaError("ref must name a type: " + repr(body))
            ref = Reference(body)
            self.pending.append((namespace, ref))
            return ref
        if kind == "alias":
            return Alias(self._nested_name(expr, kind), self.build(namespace, body))
        if kind == "record":
            return self._record(namespace, self._nested_name(expr, kind), body)
        if kind == "list":
            return List(self.build(namespace, body))
        if kind == "map":
            if not isinstance(body, list) or len(body) != 2:
                raise SchemaError("map needs [key, value]: " + repr(body))
            return Map(self.build(namespace, body[0]), self.build(namespace, body[1]))
        if kind == "tuple":
            if not isinstance(body, list):
                raise SchemaError("tuple needs a list of element types: " + repr(body))
            return Tuple([self.build(namespace, e) for e in body])
        if not isinstance(body, dict):
            raise SchemaError("function needs {inputs, outputs}: " + repr(body))
        return Function(
            inputs=[self.build(namespace, p) for p in _type_list(body, "inputs")],
            outputs=[self.build(namespace, r) for r in _type_list(body, "outputs")],
        )

    def bind_references(self) -> None:
        for namespace, ref in self.pending:
            if "." in ref.name:
                target_ns, target_name = ref.name.rsplit(".", 1)
            else:
                target_ns, target_name = namespace, ref.name
            ref.bind(self.type_system.lookup(target_ns, target_name))
        logger.debug("bound %d references", len(self.pending))
        self.pending = []

    def _record(self, namespace: str, name: str, fields: object) -> Record:
        if fields is None:
            fields = {}
        if not isinstance(fields, dict):
            raise SchemaError("record '" + name + "' fields must be a mapping")
        record = Record(name)
        for field_name, expr in fields.items():
            record.fields[str(field_name)] = self.build(namespace, expr)
        return record

    def _nested_name(self, expr: dict, kind: str) -> str:
        name = expr.get("name")
        if not isinstance(name, str) or name == "":
            raise SchemaError("nested " + kind + " needs a 'name': " + repr(expr))
        return name


def _type_list(body: dict, key: str) -> list[object]:
    items = body.get(key, [])
    if items is None:
        return []
    if not isinstance(items, list):
        raise SchemaError("function '" + key + "' must be a list")
    return items


def _load_bindings(data: object) -> BindingTable:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SchemaError("'bindings' must be a mapping")
    table = BindingTable()
    for op_name, entry in data.items():
        if not isinstance(entry, dict):
            raise SchemaError("binding for '" + str(op_name) + "' must be a mapping")
        unknown = set(entry) - {"method", "endpoint", "placement"}
        if unknown:
            raise SchemaError("binding for '" + str(op_name) + "' has unknown keys: " + ", ".join(sorted(unknown)))
        for key, value in entry.items():
            if not isinstance(value, str):
                raise SchemaError("binding for '" + str(op_name) + "': '" + key + "' must be a string")
        binding = HttpBinding(
            method=entry.get("method", "GET").upper(),
            endpoint_template=entry.get("endpoint", UNRESOLVED_ENDPOINT),
            placement=entry.get("placement", "body"),
        )
        table.add(str(op_name), binding)
    return table
