from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class InterpretationError:
    """Base of the closed set of run failures. Errors are values, not exceptions."""

    kind: ClassVar[str] = "interpretation_error"

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class OperationsLimitExceeded(InterpretationError):
    kind: ClassVar[str] = "operations_limit_exceeded"

    @property
    def message(self) -> str:
        return "operations limit exceeded"


@dataclass(frozen=True, slots=True)
class StackIsEmpty(InterpretationError):
    ip: int
    kind: ClassVar[str] = "stack_is_empty"

    @property
    def message(self) -> str:
        return f"stack is empty (IP={self.ip})"


@dataclass(frozen=True, slots=True)
class ReturnDoesntExist(InterpretationError):
    kind: ClassVar[str] = "return_doesnt_exist"

    @property
    def message(self) -> str:
        return "return instruction doesnt exist"


@dataclass(frozen=True, slots=True)
class UnknownVariable(InterpretationError):
    name: str
    ip: int
    kind: ClassVar[str] = "unknown_variable"

    @property
    def message(self) -> str:
        return f"unknown variable {self.name!r} (IP={self.ip})"


@dataclass(frozen=True, slots=True)
class UnknownLabel(InterpretationError):
    name: str
    ip: int
    kind: ClassVar[str] = "unknown_label"

    @property
    def message(self) -> str:
        return f"unknown label {self.name!r} (IP={self.ip})"


@dataclass(frozen=True, slots=True)
class DivisionByZero(InterpretationError):
    ip: int
    kind: ClassVar[str] = "division_by_zero"

    @property
    def message(self) -> str:
        return f"division by zero (IP={self.ip})"


@dataclass(frozen=True, slots=True)
class Overflow(InterpretationError):
    op: str
    val1: int
    val2: int
    ip: int
    kind: ClassVar[str] = "overflow"

    @property
    def message(self) -> str:
        return f"'{self.val1}{self.op}{self.val2}' overflowed (IP={self.ip})"


class VMError(Exception):
    def __init__(self, error: InterpretationError) -> None:
        self.error = error
        super().__init__(error.message)
