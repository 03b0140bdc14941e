"""Pytest configuration for the relaygen test suite."""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path for relaygen imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from relaygen import Function, List, Map, Primitive, Record, Reference, TypeSystem  # noqa: E402

CODEGEN_DIR = Path(__file__).parent / "codegen"

STRING = Primitive("string")
INT = Primitive("int")


@pytest.fixture
def greeter_ts() -> TypeSystem:
    """Greeter service with a single string -> string operation."""
    ts = TypeSystem()
    ts.register(
        "demo",
        "Greeter",
        Record("Greeter", {"SayHello": Function([STRING], [STRING])}),
    )
    return ts


@pytest.fixture
def chat_ts() -> TypeSystem:
    """A small chat service covering 0, 1 and N argument operations."""
    ts = TypeSystem()
    team = ts.register("chat", "Team", Record("Team", {"id": STRING, "name": STRING}))
    ts.register(
        "chat",
        "TeamService",
        Record(
            "TeamService",
            {
                "GetTeams": Function([], [List(Reference("Team", team))]),
                "CreateTeam": Function([Reference("Team", team)], [Reference("Team", team)]),
                "GetTeamsInOrg": Function([STRING, INT, INT], [List(Reference("Team", team))]),
                "TagTeams": Function([List(STRING), Map(STRING, INT)], []),
            },
        ),
    )
    return ts


# --- Codegen test discovery ---


def parse_codegen_file(path: Path) -> list[tuple[str, str, str]]:
    """Parse a .tests file into (name, schema, expected) tuples.

    Format:

        === test name
        service: Greeter
        namespaces: ...
        ---
        expected output snippet
        ---
    """
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            result.append((test_name, "\n".join(input_lines), "\n".join(expected_lines).strip()))
        else:
            i += 1
    return result


def discover_codegen_tests() -> list[tuple[str, str, str]]:
    """Find all codegen tests, returns (test_id, schema, expected)."""
    results = []
    for test_file in sorted(CODEGEN_DIR.glob("*.tests")):
        for name, schema, expected in parse_codegen_file(test_file):
            results.append((f"{test_file.stem}/{name}", schema, expected))
    return results


def pytest_generate_tests(metafunc):
    """Parametrize codegen tests over the .tests files."""
    if "codegen_schema" in metafunc.fixturenames:
        params = [
            pytest.param(schema, expected, id=test_id)
            for test_id, schema, expected in discover_codegen_tests()
        ]
        metafunc.parametrize("codegen_schema,codegen_expected", params)


def _significant_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def contains_normalized(output: str, snippet: str) -> bool:
    """True if the non-blank lines of snippet appear consecutively in output.

    Indentation and blank lines are ignored on both sides.
    """
    want = _significant_lines(snippet)
    have = _significant_lines(output)
    if not want:
        return True
    return any(have[i : i + len(want)] == want for i in range(len(have) - len(want) + 1))
