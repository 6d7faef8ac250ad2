from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

VariableName = str
LabelName = str


class _InstructionBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class LoadVal(_InstructionBase):
    op: Literal["load_val"] = "load_val"
    value: int = Field(strict=True, ge=INT64_MIN, le=INT64_MAX)


class WriteVar(_InstructionBase):
    op: Literal["write_var"] = "write_var"
    name: VariableName


class ReadVar(_InstructionBase):
    op: Literal["read_var"] = "read_var"
    name: VariableName


class BinaryInstruction(_InstructionBase):
    """Pops the left operand, then the right one, and pushes `left <symbol> right`."""

    symbol: ClassVar[str]


class Add(BinaryInstruction):
    symbol: ClassVar[str] = "+"
    op: Literal["add"] = "add"


class Subtract(BinaryInstruction):
    symbol: ClassVar[str] = "-"
    op: Literal["subtract"] = "subtract"


class Multiply(BinaryInstruction):
    symbol: ClassVar[str] = "*"
    op: Literal["multiply"] = "multiply"


class Divide(BinaryInstruction):
    symbol: ClassVar[str] = "/"
    op: Literal["divide"] = "divide"


class ReturnValue(_InstructionBase):
    op: Literal["return_value"] = "return_value"


class ConditionalJump(_InstructionBase):
    label: LabelName

    def taken(self, value: int) -> bool:
        raise NotImplementedError


class JumpIfNeg(ConditionalJump):
    op: Literal["jump_if_neg"] = "jump_if_neg"

    def taken(self, value: int) -> bool:
        return value < 0


class JumpIfPos(ConditionalJump):
    op: Literal["jump_if_pos"] = "jump_if_pos"

    def taken(self, value: int) -> bool:
        return value > 0


class JumpIfZero(ConditionalJump):
    op: Literal["jump_if_zero"] = "jump_if_zero"

    def taken(self, value: int) -> bool:
        return value == 0


class JumpIfNotZero(ConditionalJump):
    op: Literal["jump_if_not_zero"] = "jump_if_not_zero"

    def taken(self, value: int) -> bool:
        return value != 0


Instruction = Annotated[
    Union[
        LoadVal,
        WriteVar,
        ReadVar,
        Add,
        Subtract,
        Multiply,
        Divide,
        ReturnValue,
        JumpIfNeg,
        JumpIfPos,
        JumpIfZero,
        JumpIfNotZero,
    ],
    Field(discriminator="op"),
]


class Program(BaseModel):
    """Immutable bytecode: an instruction sequence plus a label table.

    Labels are not checked against `instrs`. A label may point past the end
    of the program or be referenced by no jump, and a jump may name a label
    that does not exist; the engine only finds out when such a jump is taken.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    instrs: tuple[Instruction, ...] = ()
    labels: Mapping[LabelName, NonNegativeInt] = Field(default_factory=dict, validate_default=True)

    @field_validator("labels", mode="after")
    @classmethod
    def _read_only_labels(cls, v: Mapping[LabelName, int]) -> Mapping[LabelName, int]:
        return MappingProxyType(dict(v))

    def instruction_at(self, ip: int) -> Instruction | None:
        if 0 <= ip < len(self.instrs):
            return self.instrs[ip]
        return None

    def resolve_label(self, name: LabelName) -> int | None:
        return self.labels.get(name)
