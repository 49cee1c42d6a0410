"""Interpreter stack frame: bytecode pointer, local variables and operand stack."""

from __future__ import annotations

import math
import struct
from typing import Any, Optional


class FrameError(IndexError):
    """Raised on an out-of-bounds local, a stack overflow or underflow,
    or a bytecode read outside the method's code."""


def _wrap(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    value &= mask
    return value - (1 << bits) if value >> (bits - 1) else value


def _float_to_bits(value: float) -> int:
    value = float(value)
    try:
        packed = struct.pack("<f", value)
    except OverflowError:
        packed = struct.pack("<f", math.copysign(math.inf, value))
    return struct.unpack("<i", packed)[0]


def _bits_to_float(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<i", _wrap(bits, 32)))[0]


def _double_to_bits(value: float) -> int:
    return struct.unpack("<q", struct.pack("<d", float(value)))[0]


def _bits_to_double(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<q", _wrap(bits, 64)))[0]


def _is_null(slot: Any) -> bool:
    return slot is None or (isinstance(slot, int) and slot == 0)


def _format_slot(slot: Any) -> str:
    if slot is None:
        return "0"
    if isinstance(slot, int):
        return str(slot)
    return str(id(slot))


class InterpreterFrame:
    """The execution context of one method invocation.

    Each local variable and operand stack entry is one slot. A long or double
    occupies two slots; its value lives in the first of them.
    """

    def __init__(
        self,
        code: bytes,
        max_locals: int,
        max_stack: int,
        *,
        constants: Any = None,
        caller: Optional["InterpreterFrame"] = None,
        method_name: str = "<unknown>",
    ) -> None:
        if max_locals < 0 or max_stack < 0:
            raise ValueError("max_locals and max_stack must not be negative")
        self.code = bytes(code)
        self.max_locals = max_locals
        self.max_stack = max_stack
        self.constants = constants
        self.caller = caller
        self.method_name = method_name
        self.sp = 0
        self._pc = 0
        self._locals: list[Any] = [0] * max_locals
        self._stack: list[Any] = [0] * max_stack

    # ---- bytecode pointer ----

    def bci(self) -> int:
        """Offset of the current instruction from the start of the code."""
        return self._pc

    def _byte_at(self, offset: int) -> int:
        position = self._pc + offset
        if not 0 <= position < len(self.code):
            raise FrameError(f"bytecode read at {position} outside code of length {len(self.code)}")
        return self.code[position]

    def _bytes_at(self, offset: int, count: int) -> bytes:
        start = self._pc + offset
        if start < 0 or start + count > len(self.code):
            raise FrameError(f"bytecode read at {start} outside code of length {len(self.code)}")
        return self.code[start:start + count]

    def current_bytecode(self) -> int:
        return self._byte_at(0)

    def read_u1(self, offset: int) -> int:
        return self._byte_at(offset)

    def read_s1(self, offset: int) -> int:
        return _wrap(self._byte_at(offset), 8)

    def read_u2(self, offset: int) -> int:
        return int.from_bytes(self._bytes_at(offset, 2), "big")

    def read_s2(self, offset: int) -> int:
        return int.from_bytes(self._bytes_at(offset, 2), "big", signed=True)

    def read_s4(self, offset: int) -> int:
        return int.from_bytes(self._bytes_at(offset, 4), "big", signed=True)

    def advance(self, delta: int) -> None:
        self._pc += delta

    def jump_to(self, bci: int) -> None:
        self._pc = bci

    # ---- local variables ----

    def _check_local(self, index: int, width: int = 1) -> None:
        if not (index >= 0 and index + width - 1 < self.max_locals):
            raise FrameError(f"local index {index} out of bounds (max_locals={self.max_locals})")

    def local_int(self, index: int) -> int:
        self._check_local(index)
        slot = self._locals[index]
        return 0 if slot is None else slot

    def set_local_int(self, index: int, value: int) -> None:
        self._check_local(index)
        self._locals[index] = _wrap(int(value), 64)

    def local_long(self, index: int) -> int:
        self._check_local(index, 2)
        return _wrap(self._locals[index] or 0, 64)

    def set_local_long(self, index: int, value: int) -> None:
        self._check_local(index, 2)
        self._locals[index] = _wrap(int(value), 64)

    def local_float(self, index: int) -> float:
        self._check_local(index)
        return _bits_to_float(self._locals[index] or 0)

    def set_local_float(self, index: int, value: float) -> None:
        self._check_local(index)
        self._locals[index] = _float_to_bits(value)

    def local_double(self, index: int) -> float:
        self._check_local(index, 2)
        return _bits_to_double(self._locals[index] or 0)

    def set_local_double(self, index: int, value: float) -> None:
        self._check_local(index, 2)
        self._locals[index] = _double_to_bits(value)

    def local_oop(self, index: int) -> Any:
        self._check_local(index)
        slot = self._locals[index]
        return None if _is_null(slot) else slot

    def set_local_oop(self, index: int, value: Any) -> None:
        self._check_local(index)
        self._locals[index] = value

    # ---- operand stack ----

    def stack_is_empty(self) -> bool:
        return self.sp == 0

    def _require_room(self, width: int) -> None:
        if self.sp + width > self.max_stack:
            raise FrameError("stack overflow")

    def _require_items(self, count: int) -> None:
        if self.sp < count:
            raise FrameError("stack underflow")

    def _peek_slot(self, depth: int) -> Any:
        position = self.sp - 1 - depth
        if depth < 0 or position < 0:
            raise FrameError("stack underflow")
        return self._stack[position]

    def push_int(self, value: int) -> None:
        self._require_room(1)
        self._stack[self.sp] = _wrap(int(value), 32)
        self.sp += 1

    def pop_int(self) -> int:
        self._require_items(1)
        self.sp -= 1
        return _wrap(self._stack[self.sp] or 0, 32)

    def peek_int(self, depth: int = 0) -> int:
        return _wrap(self._peek_slot(depth) or 0, 32)

    def push_long(self, value: int) -> None:
        self._require_room(2)
        self._stack[self.sp] = _wrap(int(value), 64)
        self.sp += 2

    def pop_long(self) -> int:
        self._require_items(2)
        self.sp -= 2
        return _wrap(self._stack[self.sp] or 0, 64)

    def push_float(self, value: float) -> None:
        self._require_room(1)
        self._stack[self.sp] = _float_to_bits(value)
        self.sp += 1

    def pop_float(self) -> float:
        self._require_items(1)
        self.sp -= 1
        return _bits_to_float(self._stack[self.sp] or 0)

    def push_double(self, value: float) -> None:
        self._require_room(2)
        self._stack[self.sp] = _double_to_bits(value)
        self.sp += 2

    def pop_double(self) -> float:
        self._require_items(2)
        self.sp -= 2
        return _bits_to_double(self._stack[self.sp] or 0)

    def push_oop(self, value: Any) -> None:
        self._require_room(1)
        self._stack[self.sp] = value
        self.sp += 1

    def pop_oop(self) -> Any:
        self._require_items(1)
        self.sp -= 1
        slot = self._stack[self.sp]
        return None if _is_null(slot) else slot

    def push_raw(self, value: Any) -> None:
        self._require_room(1)
        self._stack[self.sp] = value
        self.sp += 1

    def pop_raw(self) -> Any:
        self._require_items(1)
        self.sp -= 1
        return self._stack[self.sp]

    def peek_raw(self, depth: int = 0) -> Any:
        return self._peek_slot(depth)

    # ---- diagnostics ----

    def describe(self) -> str:
        """Return a multi-line dump of the frame's state."""
        locals_text = ", ".join(_format_slot(slot) for slot in self._locals)
        stack_text = ", ".join(_format_slot(slot) for slot in self._stack[: self.sp])
        return (
            f"  Frame: method={self.method_name}, bci={self.bci()}, "
            f"sp={self.sp}/{self.max_stack}, locals={self.max_locals}\n"
            f"    locals: [{locals_text}]\n"
            f"    stack:  [{stack_text}]\n"
        )