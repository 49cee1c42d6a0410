import pytest

from minijvm.thread import (
    BasicType,
    JavaFrameAnchor,
    JavaThread,
    JavaThreadState,
    JavaValue,
)


def test_java_thread_state_management():
    thread = JavaThread("test-thread")
    assert thread.state == JavaThreadState.NEW
    assert not thread.has_pending_exception()
    assert thread.name == "test-thread"

    thread.state = JavaThreadState.IN_JAVA
    assert thread.is_in_java()
    assert not thread.is_in_vm()

    thread.state = JavaThreadState.IN_VM
    assert thread.is_in_vm()
    assert not thread.is_in_java()

    thread.state = JavaThreadState.IN_NATIVE
    assert thread.is_in_native()


def test_java_thread_exception():
    thread = JavaThread("test-thread")
    thread.set_pending_exception(0xDEAD, "test exception")
    assert thread.has_pending_exception()
    assert thread.exception_message == "test exception"
    assert thread.pending_exception == 0xDEAD

    thread.clear_pending_exception()
    assert not thread.has_pending_exception()
    assert thread.exception_message is None


def test_default_thread_name():
    assert JavaThread().name == "main"


def test_describe_without_exception():
    thread = JavaThread("worker")
    text = thread.describe()
    assert 'name="worker"' in text
    assert f"state={int(JavaThreadState.NEW)}" in text
    assert "exception pending" not in text


def test_describe_with_exception():
    thread = JavaThread("worker")
    thread.set_pending_exception(object(), "boom")
    assert thread.describe().endswith("[exception pending: boom]")


def test_describe_with_exception_without_message():
    thread = JavaThread("worker")
    thread.set_pending_exception(object())
    assert thread.describe().endswith("[exception pending: ]")


def test_frame_anchor():
    anchor = JavaFrameAnchor()
    assert not anchor.has_last_java_frame()
    anchor.last_java_sp = 5
    anchor.last_java_pc = 7
    assert anchor.has_last_java_frame()
    anchor.clear()
    assert not anchor.has_last_java_frame()
    assert anchor.last_java_pc is None


def test_thread_anchor_delegation():
    thread = JavaThread()
    assert not thread.has_last_java_frame()
    thread.anchor.last_java_sp = 1
    assert thread.has_last_java_frame()


def test_java_value_defaults():
    value = JavaValue()
    assert value.type is BasicType.VOID
    assert value.value == 0
    assert JavaValue(BasicType.INT).type is BasicType.INT


def test_java_value_store_int():
    result = JavaValue(BasicType.VOID)
    result.store(7, BasicType.INT)
    assert result.type is BasicType.INT
    assert result.value == 7


def test_java_value_int_wraps_to_32_bits():
    result = JavaValue()
    result.store(2**31, BasicType.INT)
    assert result.value == -(2**31)


def test_java_value_long_wraps_to_64_bits():
    result = JavaValue()
    result.store(2**63, BasicType.LONG)
    assert result.type is BasicType.LONG
    assert result.value == -(2**63)


def test_java_value_float_is_single_precision():
    result = JavaValue()
    result.store(0.1, BasicType.FLOAT)
    assert result.type is BasicType.FLOAT
    assert result.value != 0.1
    assert result.value == pytest.approx(0.1, rel=1e-6)


def test_java_value_double_and_object():
    result = JavaValue()
    result.store(0.1, BasicType.DOUBLE)
    assert result.value == 0.1
    marker = object()
    result.store(marker, BasicType.OBJECT)
    assert result.type is BasicType.OBJECT
    assert result.value is marker


def test_basic_type_codes_used_by_newarray():
    assert BasicType(10) is BasicType.INT
    assert BasicType(8) is BasicType.BYTE