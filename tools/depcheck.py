from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

FORBIDDEN_MODULES = {
    "fastapi",
    "pydantic",
    "sqlalchemy",
    "redis",
    "httpx",
    "requests",
    "opentelemetry",
    "prometheus_client",
    "tablewait.application",
    "tablewait.infrastructure",
    "tablewait.config",
    "tablewait.tools",
}

# (receiver, attribute) pairs that read the wall clock.
FORBIDDEN_CLOCK_CALLS = {
    ("datetime", "now"),
    ("datetime", "utcnow"),
    ("datetime", "today"),
    ("date", "today"),
    ("time", "time"),
    ("time", "monotonic"),
    ("time", "localtime"),
}

DEFAULT_DOMAIN_PATH = Path(__file__).resolve().parents[1] / "src" / "tablewait" / "domain"


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    kind: str
    name: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches_forbidden(module: str) -> bool:
    for forbidden in FORBIDDEN_MODULES:
        if module == forbidden or module.startswith(f"{forbidden}."):
            return True
    return False


def _clock_call_name(node: ast.Call) -> str | None:
    func = node.func
    if not isinstance(func, ast.Attribute):
        return None
    receiver = func.value
    if isinstance(receiver, ast.Name):
        receiver_name = receiver.id
    elif isinstance(receiver, ast.Attribute):
        receiver_name = receiver.attr
    else:
        return None
    if (receiver_name, func.attr) in FORBIDDEN_CLOCK_CALLS:
        return f"{receiver_name}.{func.attr}"
    return None


def _scan_file(file_path: Path) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    violations: list[Violation] = []

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if _matches_forbidden(alias.name):
                    violations.append(
                        Violation(
                            file_path=file_path,
                            line=node.lineno,
                            kind="import",
                            name=alias.name,
                        )
                    )
        elif isinstance(node, ast.ImportFrom) and node.module:
            if _matches_forbidden(node.module):
                violations.append(
                    Violation(
                        file_path=file_path,
                        line=node.lineno,
                        kind="import",
                        name=node.module,
                    )
                )
        elif isinstance(node, ast.Call):
            clock_call = _clock_call_name(node)
            if clock_call is not None:
                violations.append(
                    Violation(
                        file_path=file_path,
                        line=node.lineno,
                        kind="clock",
                        name=clock_call,
                    )
                )

    return violations


def find_violations(paths: Sequence[Path]) -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Purity check for src/tablewait/domain: no outer-layer imports, no clock reads."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to src/tablewait/domain.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    scan_paths = [Path(item) for item in args.path] if args.path else [DEFAULT_DOMAIN_PATH]

    violations = find_violations(scan_paths)
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: domain purity violations detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.kind} {violation.name}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
