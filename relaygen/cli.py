"""relaygen CLI: generate a client stub for one service of a schema file."""

from __future__ import annotations

import logging
import sys

from .errors import GenerationError, SchemaError
from .generator import GeneratorConfig, generate
from .schema import load_schema
from .targets import TARGETS

USAGE: str = """\
relaygen [OPTIONS] SCHEMA SERVICE

Generate an HTTP client for SERVICE, a record of operations declared in the
JSON or YAML SCHEMA file.

Options:
  --target TARGET     Output language: go, python (default: go)
  --namespace NS      Namespace of SERVICE (default: first namespace in SCHEMA)
  --prefix PREFIX     Client class name prefix (default: none)
  --suffix SUFFIX     Client class name suffix (default: Client)
  --package NAME      Package name of the generated client (default: restclient)
  -o, --output FILE   Write output to FILE instead of stdout
  -v, --verbose       Log generation steps to stderr
  --help              Show this help message
"""

_VALUE_FLAGS: dict[str, str] = {
    "--target": "target",
    "--namespace": "namespace",
    "--prefix": "prefix",
    "--suffix": "suffix",
    "--package": "package",
    "-o": "output",
    "--output": "output",
}


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    opts: dict[str, str] = {}
    positional: list[str] = []
    verbose = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        if arg == "--verbose" or arg == "-v":
            verbose = True
            i += 1
        elif arg in _VALUE_FLAGS:
            if i + 1 >= len(args):
                print("relaygen: " + arg + " requires a value", file=sys.stderr)
                return 2
            opts[_VALUE_FLAGS[arg]] = args[i + 1]
            i += 2
        elif arg.startswith("-"):
            print("relaygen: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        else:
            positional.append(arg)
            i += 1
    if len(positional) != 2:
        print("relaygen: expected SCHEMA and SERVICE arguments", file=sys.stderr)
        print(USAGE, end="", file=sys.stderr)
        return 2
    target = opts.get("target", "go")
    if target not in TARGETS:
        print("relaygen: unknown target '" + target + "'", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    schema_path, service_name = positional
    config = GeneratorConfig(
        client_prefix=opts.get("prefix", ""),
        client_suffix=opts.get("suffix", "Client"),
        client_package=opts.get("package", "restclient"),
        target=target,
    )
    try:
        schema = load_schema(schema_path)
        namespace = opts.get("namespace", schema.default_namespace)
        known = schema.type_system.namespaces()
        if namespace not in known:
            raise SchemaError("unknown namespace '" + namespace + "' (schema declares: " + ", ".join(known) + ")")
        source, failures = generate(
            schema.type_system,
            namespace,
            service_name,
            bindings=schema.bindings,
            config=config,
        )
    except GenerationError as e:
        print("error: " + e.msg, file=sys.stderr)
        return 1

    for failure in failures:
        print("error: " + failure.name + ": " + failure.error.msg, file=sys.stderr)
    if write_output(source, opts.get("output")) != 0:
        return 1
    if failures:
        return 1
    return 0


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w") as f:
                f.write(output)
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
