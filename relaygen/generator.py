"""Client stub generator: service record -> client class source text.

For each operation of a service record the generator emits a method which:
1. has the same inputs as the service operation,
2. writes every argument into a request body via its type's writer,
3. creates a transport level request from the operation's HTTP binding,
4. sends the request and returns the raw response.

Each method is assembled from three templates (start, body, end) in memory and
written to the output only once all three rendered, so a failing operation
leaves nothing behind. Generation never touches the network; only the
generated code does.
"""

from __future__ import annotations

import enum
import io
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .bindings import BindingTable, HttpBinding
from .errors import (
    GenerationError,
    NotAFunctionError,
    NotARecordError,
    TemplateRenderError,
    UnsupportedTypeError,
)
from .targets import ArgumentRenderer, get_target
from .types import Function, Record, Type, resolve
from .typesys import TypeSystem
from .writers import writer_call

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


# ============================================================
# CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class GeneratorConfig:
    """Naming and output options for generated clients."""

    client_prefix: str = ""
    client_suffix: str = "Client"
    # None: the target's own request type
    transport_request_type: str | None = None
    client_package: str = "restclient"
    target: str = "go"
    # Python target: where the Write_* routines are imported from
    writers_module: str = "writers"


# ============================================================
# PER-OPERATION STATE
# ============================================================


class EmitState(enum.Enum):
    START = "start"
    HEADER_EMITTED = "header_emitted"
    ARGS_SERIALIZED = "args_serialized"
    REQUEST_CONSTRUCTED = "request_constructed"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationContext:
    """Everything known about the operation currently being emitted."""

    service: Record
    op_name: str
    op_type: Function
    binding: HttpBinding
    writer_calls: list[str] = field(default_factory=list)
    state: EmitState = EmitState.START

    def advance(self, state: EmitState) -> None:
        logger.debug("%s.%s: %s -> %s", self.service.name, self.op_name, self.state.value, state.value)
        self.state = state

    @property
    def arity(self) -> str:
        """Shape of the argument serialization: none, single or sequence."""
        n = self.op_type.num_inputs
        if n == 0:
            return "none"
        if n == 1:
            return "single"
        return "sequence"


@dataclass
class OperationFailure:
    """An operation of a service that could not be emitted."""

    name: str
    error: GenerationError


def string_literal(value: str) -> str:
    """Double-quoted literal, valid in both Go and Python sources."""
    return json.dumps(value)


# ============================================================
# GENERATOR
# ============================================================


class Generator:
    """Emits client source for one service at a time.

    Not thread-safe; the type system it reads is frozen on first emission and
    may be shared by other generators.
    """

    def __init__(
        self,
        type_system: TypeSystem,
        bindings: BindingTable | None = None,
        config: GeneratorConfig | None = None,
        renderer: ArgumentRenderer | None = None,
        templates_dir: str | Path | None = None,
    ) -> None:
        self.type_system = type_system
        self.bindings = bindings if bindings is not None else BindingTable()
        self.config = config if config is not None else GeneratorConfig()
        self.target = get_target(self.config.target)
        self.arg_list_maker: ArgumentRenderer = (
            renderer if renderer is not None else self.target.renderer
        )
        if templates_dir is None:
            templates_dir = TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["literal"] = string_literal
        self.service_name: str | None = None
        self.service_type: Record | None = None

    @property
    def client_name(self) -> str:
        if self.service_name is None:
            raise GenerationError("no service selected; call emit_client_class first")
        return self.config.client_prefix + self.service_name + self.config.client_suffix

    @property
    def transport_request(self) -> str:
        if self.config.transport_request_type is not None:
            return self.config.transport_request_type
        return self.target.transport_request

    # ── Class ─────────────────────────────────────────────────

    def emit_client_class(self, namespace: str, service_name: str, output: TextIO) -> Record:
        """Select a service and write the client class header for it."""
        self.type_system.freeze()
        service = resolve(self.type_system.lookup(namespace, service_name))
        if not isinstance(service, Record):
            raise NotARecordError(service_name, service.kind)
        self.service_name = service_name
        self.service_type = service
        output.write(self._render("client", self._values()))
        logger.debug("emitted client class %s for %s.%s", self.client_name, namespace, service_name)
        return service

    # ── Methods ───────────────────────────────────────────────

    def emit_operation_method(self, operation: tuple[str, Type], output: TextIO) -> None:
        """Write the Send<Op>Request method for one (name, signature) pair."""
        if self.service_type is None:
            raise GenerationError("no service selected; call emit_client_class first")
        op_name, typ = operation
        op_type = resolve(typ)
        if not isinstance(op_type, Function):
            raise NotAFunctionError(op_name, op_type.kind)
        if not self.bindings.is_bound(op_name):
            logger.info("operation %s has no HTTP binding, using defaults", op_name)
        ctx = GenerationContext(
            service=self.service_type,
            op_name=op_name,
            op_type=op_type,
            binding=self.bindings.binding_for(op_name),
        )
        parts: list[str] = []
        try:
            parts.append(self._render("method_start", self._values(ctx)))
            ctx.advance(EmitState.HEADER_EMITTED)
            ctx.writer_calls = self._writer_calls(op_type)
            parts.append(self._render("method_body", self._values(ctx)))
            ctx.advance(EmitState.ARGS_SERIALIZED)
            parts.append(self._render("method_end", self._values(ctx)))
            ctx.advance(EmitState.REQUEST_CONSTRUCTED)
        except GenerationError:
            ctx.advance(EmitState.FAILED)
            raise
        output.write("".join(parts))
        ctx.advance(EmitState.DONE)

    def emit_service(self, namespace: str, service_name: str, output: TextIO) -> list[OperationFailure]:
        """Emit the client class and one method per operation, in declaration order.

        Operations whose arguments have no writer are skipped and reported;
        every other error propagates.
        """
        service = self.emit_client_class(namespace, service_name, output)
        failures: list[OperationFailure] = []
        for op_name, typ in service.fields.items():
            try:
                self.emit_operation_method((op_name, typ), output)
            except UnsupportedTypeError as e:
                logger.warning("skipping %s.%s: %s", service_name, op_name, e.msg)
                failures.append(OperationFailure(op_name, e))
        return failures

    # ── Helpers ───────────────────────────────────────────────

    def _writer_calls(self, op_type: Function) -> list[str]:
        calls: list[str] = []
        for index, param in enumerate(op_type.inputs):
            calls.append(writer_call(param, "body", "arg" + str(index)))
        return calls

    def _values(self, ctx: GenerationContext | None = None) -> dict[str, object]:
        values: dict[str, object] = {
            "client_name": self.client_name,
            "package": self.config.client_package,
            "service_name": self.service_name,
            "transport_request": self.transport_request,
            "writers_module": self.config.writers_module,
            "arg_list_maker": self.arg_list_maker,
        }
        if ctx is not None:
            values["op_name"] = ctx.op_name
            values["op_type"] = ctx.op_type
            values["op_method"] = ctx.binding.method
            values["op_endpoint"] = ctx.binding.endpoint_template
            values["op_placement"] = ctx.binding.placement
            values["writer_calls"] = ctx.writer_calls
            values["arity"] = ctx.arity
        return values

    def _render(self, part: str, values: dict[str, object]) -> str:
        name = self.target.template(part)
        try:
            return self.env.get_template(name).render(values)
        except TemplateError as e:
            raise TemplateRenderError("cannot render " + name + ": " + str(e)) from e


def generate(
    type_system: TypeSystem,
    namespace: str,
    service_name: str,
    bindings: BindingTable | None = None,
    config: GeneratorConfig | None = None,
) -> tuple[str, list[OperationFailure]]:
    """Generate the whole client for a service; returns (source, failures)."""
    out = io.StringIO()
    gen = Generator(type_system, bindings=bindings, config=config)
    failures = gen.emit_service(namespace, service_name, out)
    return out.getvalue(), failures
