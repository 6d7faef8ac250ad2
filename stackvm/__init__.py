from __future__ import annotations

from stackvm.engine import (
    DEFAULT_MAX_OPS,
    Engine,
    EngineSettings,
    RunResult,
    RunStatus,
    run,
)
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
    Instruction,
    JumpIfNeg,
    JumpIfNotZero,
    JumpIfPos,
    JumpIfZero,
    LoadVal,
    Multiply,
    Program,
    ReadVar,
    ReturnValue,
    Subtract,
    WriteVar,
)

__all__ = [
    "__version__",
    # Engine
    "Engine",
    "EngineSettings",
    "RunResult",
    "RunStatus",
    "DEFAULT_MAX_OPS",
    "run",
    # Errors
    "InterpretationError",
    "OperationsLimitExceeded",
    "StackIsEmpty",
    "ReturnDoesntExist",
    "UnknownVariable",
    "UnknownLabel",
    "DivisionByZero",
    "Overflow",
    "VMError",
    # Program
    "Program",
    "Instruction",
    "BinaryInstruction",
    "ConditionalJump",
    "LoadVal",
    "WriteVar",
    "ReadVar",
    "Add",
    "Subtract",
    "Multiply",
    "Divide",
    "ReturnValue",
    "JumpIfNeg",
    "JumpIfPos",
    "JumpIfZero",
    "JumpIfNotZero",
    "INT64_MIN",
    "INT64_MAX",
]

__version__ = "0.1.0"
