from __future__ import annotations

from stackvm.schemas import (
    Add,
    JumpIfNotZero,
    LoadVal,
    Multiply,
    Program,
    ReadVar,
    ReturnValue,
    Subtract,
    WriteVar,
)


def counter_loop_program() -> Program:
    """x=1, y=2, z=3; loop { x = 1 + x; z = z - 1 } while z != 0; return x * y.

    Halts with 8.
    """
    return Program(
        instrs=(
            LoadVal(value=1),
            WriteVar(name="x"),
            LoadVal(value=2),
            WriteVar(name="y"),
            LoadVal(value=3),
            WriteVar(name="z"),
            # a:
            ReadVar(name="x"),
            LoadVal(value=1),
            Add(),
            WriteVar(name="x"),
            LoadVal(value=1),
            ReadVar(name="z"),
            Subtract(),
            WriteVar(name="z"),
            ReadVar(name="z"),
            JumpIfNotZero(label="a"),
            ReadVar(name="x"),
            ReadVar(name="y"),
            Multiply(),
            ReturnValue(),
        ),
        labels={"a": 6},
    )
