from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from stackvm.errors import (
    DivisionByZero,
    InterpretationError,
    OperationsLimitExceeded,
    Overflow,
    ReturnDoesntExist,
    StackIsEmpty,
    UnknownLabel,
    UnknownVariable,
    VMError,
)
from stackvm.schemas import (
    INT64_MAX,
    INT64_MIN,
    Add,
    BinaryInstruction,
    ConditionalJump,
    Divide,
    LoadVal,
    Multiply,
    Program,
    ReadVar,
    ReturnValue,
    Subtract,
    WriteVar,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_OPS = 1_000


@dataclass(frozen=True)
class EngineSettings:
    # Upper bound on fetched instructions per run; the next fetch fails.
    max_ops: int = DEFAULT_MAX_OPS

    def __post_init__(self) -> None:
        if isinstance(self.max_ops, bool) or not isinstance(self.max_ops, int):
            raise ValueError("max_ops must be an integer")
        if self.max_ops < 1:
            raise ValueError("max_ops must be >= 1")


class RunStatus(str, Enum):
    HALTED = "HALTED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class RunResult:
    status: RunStatus
    value: int | None = None
    error: InterpretationError | None = None

    @classmethod
    def ok(cls, value: int) -> RunResult:
        return cls(status=RunStatus.HALTED, value=value)

    @classmethod
    def err(cls, error: InterpretationError) -> RunResult:
        return cls(status=RunStatus.FAILED, error=error)

    @property
    def success(self) -> bool:
        return self.status == RunStatus.HALTED

    def unwrap(self) -> int:
        """Return the halted value, or raise VMError carrying the failure."""
        if self.error is not None:
            raise VMError(self.error)
        if self.value is None:
            raise AssertionError("halted run without a value")
        return self.value


def _pop(stack: list[int], *, ip: int) -> int | StackIsEmpty:
    if not stack:
        return StackIsEmpty(ip)
    return stack.pop()


def _in_range(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def _trunc_div(val1: int, val2: int) -> int:
    # Python's // floors; the machine truncates toward zero.
    quotient = abs(val1) // abs(val2)
    return quotient if (val1 < 0) == (val2 < 0) else -quotient


def _apply_binary(
    instr: BinaryInstruction, *, val1: int, val2: int, ip: int
) -> int | InterpretationError:
    if isinstance(instr, Add):
        result = val1 + val2
    elif isinstance(instr, Subtract):
        result = val1 - val2
    elif isinstance(instr, Multiply):
        result = val1 * val2
    elif isinstance(instr, Divide):
        if val2 == 0:
            return DivisionByZero(ip=ip)
        result = _trunc_div(val1, val2)
    else:
        raise AssertionError(f"unhandled binary op: {instr.op}")

    if not _in_range(result):
        return Overflow(op=instr.symbol, val1=val1, val2=val2, ip=ip)
    return result


class Engine:
    """Fetch-decode-execute loop over a Program.

    The engine keeps no state between calls: every `run` owns a fresh operand
    stack, variable store, instruction pointer and operation counter, so one
    Engine (and one Program) can serve any number of runs, concurrently or not.
    """

    def __init__(self, *, settings: EngineSettings | None = None) -> None:
        self._settings = settings or EngineSettings()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def run(self, program: Program) -> RunResult:
        logger.debug(
            "run start: %d instructions, %d labels, max_ops=%d",
            len(program.instrs),
            len(program.labels),
            self._settings.max_ops,
        )
        result, executed = self._execute(program)
        if result.success:
            logger.debug("run halted after %d ops: value=%d", executed, result.value)
        else:
            logger.debug("run failed after %d ops: %s", executed, result.error)
        return result

    def _execute(self, program: Program) -> tuple[RunResult, int]:
        max_ops = self._settings.max_ops
        stack: list[int] = []
        variables: dict[str, int] = {}
        ip = 0
        executed = 0

        while True:
            executed += 1
            if executed > max_ops:
                return RunResult.err(OperationsLimitExceeded()), executed - 1

            instr = program.instruction_at(ip)
            if instr is None:
                return RunResult.err(ReturnDoesntExist()), executed

            if isinstance(instr, LoadVal):
                stack.append(instr.value)

            elif isinstance(instr, WriteVar):
                val = _pop(stack, ip=ip)
                if isinstance(val, StackIsEmpty):
                    return RunResult.err(val), executed
                variables[instr.name] = val

            elif isinstance(instr, ReadVar):
                if instr.name not in variables:
                    return RunResult.err(UnknownVariable(name=instr.name, ip=ip)), executed
                stack.append(variables[instr.name])

            elif isinstance(instr, BinaryInstruction):
                val1 = _pop(stack, ip=ip)
                if isinstance(val1, StackIsEmpty):
                    return RunResult.err(val1), executed
                val2 = _pop(stack, ip=ip)
                if isinstance(val2, StackIsEmpty):
                    return RunResult.err(val2), executed
                computed = _apply_binary(instr, val1=val1, val2=val2, ip=ip)
                if isinstance(computed, InterpretationError):
                    return RunResult.err(computed), executed
                stack.append(computed)

            elif isinstance(instr, ReturnValue):
                val = _pop(stack, ip=ip)
                if isinstance(val, StackIsEmpty):
                    return RunResult.err(val), executed
                return RunResult.ok(val), executed

            elif isinstance(instr, ConditionalJump):
                val = _pop(stack, ip=ip)
                if isinstance(val, StackIsEmpty):
                    return RunResult.err(val), executed
                if instr.taken(val):
                    target = program.resolve_label(instr.label)
                    if target is None:
                        return RunResult.err(UnknownLabel(name=instr.label, ip=ip)), executed
                    ip = target
                    continue

            else:
                raise AssertionError(f"unhandled instruction: {instr.op}")

            ip += 1


def run(program: Program, *, settings: EngineSettings | None = None) -> RunResult:
    return Engine(settings=settings).run(program)
