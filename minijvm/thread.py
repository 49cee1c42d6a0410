"""Java thread state, call results and frame anchors."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import Any, Optional


class BasicType(enum.IntEnum):
    """Primitive and reference type tags."""

    BOOLEAN = 4
    CHAR = 5
    FLOAT = 6
    DOUBLE = 7
    BYTE = 8
    SHORT = 9
    INT = 10
    LONG = 11
    OBJECT = 12
    ARRAY = 13
    VOID = 14


class JavaThreadState(enum.IntEnum):
    """Where a thread is currently executing."""

    UNINITIALIZED = 0
    NEW = 2
    NEW_TRANS = 3
    IN_NATIVE = 4
    IN_NATIVE_TRANS = 5
    IN_VM = 6
    IN_VM_TRANS = 7
    IN_JAVA = 8
    IN_JAVA_TRANS = 9
    BLOCKED = 10
    BLOCKED_TRANS = 11


@dataclass
class JavaFrameAnchor:
    """Marks the boundary between Java and native execution."""

    last_java_sp: Optional[Any] = None
    last_java_pc: Optional[Any] = None

    def clear(self) -> None:
        self.last_java_sp = None
        self.last_java_pc = None

    def has_last_java_frame(self) -> bool:
        return self.last_java_sp is not None


def _wrap(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    value &= mask
    return value - (1 << bits) if value >> (bits - 1) else value


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass
class JavaValue:
    """The result of a method call together with its type."""

    type: BasicType = BasicType.VOID
    value: Any = 0

    def store(self, value: Any, basic_type: BasicType) -> None:
        """Store a value of the given type, narrowing it as that type requires."""
        basic_type = BasicType(basic_type)
        if basic_type is BasicType.INT:
            value = _wrap(int(value), 32)
        elif basic_type is BasicType.LONG:
            value = _wrap(int(value), 64)
        elif basic_type is BasicType.FLOAT:
            value = _to_float32(float(value))
        elif basic_type is BasicType.DOUBLE:
            value = float(value)
        self.value = value
        self.type = basic_type


@dataclass(eq=False)
class JavaThread:
    """A single thread executing Java code."""

    name: str = "main"
    state: JavaThreadState = JavaThreadState.NEW
    anchor: JavaFrameAnchor = field(default_factory=JavaFrameAnchor)
    pending_exception: Optional[Any] = None
    exception_message: Optional[str] = None
    vm_result: Optional[Any] = None
    vm_result_2: Optional[Any] = None
    current_method: Optional[Any] = None

    def is_in_java(self) -> bool:
        return self.state == JavaThreadState.IN_JAVA

    def is_in_vm(self) -> bool:
        return self.state == JavaThreadState.IN_VM

    def is_in_native(self) -> bool:
        return self.state == JavaThreadState.IN_NATIVE

    def has_last_java_frame(self) -> bool:
        return self.anchor.has_last_java_frame()

    def has_pending_exception(self) -> bool:
        return self.pending_exception is not None

    def set_pending_exception(self, exception: Any, message: Optional[str] = None) -> None:
        self.pending_exception = exception
        self.exception_message = message

    def clear_pending_exception(self) -> None:
        self.pending_exception = None
        self.exception_message = None

    def describe(self) -> str:
        """Return a one-line description of the thread."""
        text = f'JavaThread({id(self):#x}) name="{self.name}" state={int(self.state)}'
        if self.pending_exception is not None:
            text += f" [exception pending: {self.exception_message or ''}]"
        return text