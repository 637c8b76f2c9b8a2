"""Exceptions raised by the route generator."""

from __future__ import annotations

from pathlib import Path


class GeneratorError(Exception):
    """Base class for every error that aborts a generation run."""


class SchemaNotFoundError(GeneratorError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Prisma schema not found at: {path}")


class SchemaParseError(GeneratorError):
    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class UnknownOperationError(GeneratorError, ValueError):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Unknown operation: {operation}")
