# minijvm

Building blocks for the runtime of a small Java virtual machine, in plain
Python with no third-party dependencies.

The package has three modules:

- **`minijvm.arguments`**: parses a VM command line (`-cp` / `-classpath`,
  `-Xmx<size>`, `--test` and a main class name) into an `Arguments`
  dataclass. A malformed command line raises `ArgumentError`, which is a
  `ValueError`. `usage()` returns the help text as a string.
- **`minijvm.thread`**: `JavaThread`, with its `JavaThreadState`, pending
  exception and `JavaFrameAnchor`. It also provides `JavaValue`, a typed call
  result tagged with a `BasicType`.
- **`minijvm.frame`**: `InterpreterFrame`, the execution context of one
  method. It holds the bytecode position, big-endian operand reads, a local
  variable table and an operand stack. Misuse raises `FrameError`, which is an
  `IndexError`.

## Installing

```
pip install .
pip install ".[test]"   # adds pytest
```

## Command-line arguments

```python
from minijvm.arguments import ArgumentError, parse_arguments, parse_size, usage

parse_size("512m")   # 536870912
parse_size("64K")    # 65536

args = parse_arguments(["-Xmx512m", "-cp", "classes", "com/example/Main"])
args.classpath        # "classes"
args.heap_size        # 536870912
args.main_class_name  # "com/example/Main"

try:
    parse_arguments(["-Xmx12q", "Main"])
except ArgumentError as error:
    print(error)      # Invalid heap size: -Xmx12q
    print(usage())
```

`parse_arguments` takes the arguments without the program name.

- Sizes take an optional `k`, `m` or `g` suffix, in either case.
- A size of zero is rejected.
- The class path defaults to `.` and the heap size to 256 MB.
- When an option is repeated, the last value wins. The last argument that is
  not an option becomes the main class.
- Any other argument that starts with `-` is an error.
- An empty argument list is an error.
- A main class is required unless `--test` is given. In that case
  `test_mode` is `True`.

## Threads and call results

```python
from minijvm.thread import BasicType, JavaThread, JavaThreadState, JavaValue

thread = JavaThread("worker")
thread.state                        # JavaThreadState.NEW
thread.state = JavaThreadState.IN_JAVA
thread.is_in_java()                 # True

thread.set_pending_exception(object(), "boom")
thread.has_pending_exception()      # True
thread.describe()                   # one-line summary, including the message
thread.clear_pending_exception()

result = JavaValue()
result.store(2**31, BasicType.INT)
result.value                        # -2147483648
```

`JavaValue.store` narrows values by type:

- `INT` and `LONG` values wrap to 32 and 64 bits.
- `FLOAT` values are rounded to single precision.

The `JavaFrameAnchor` on `thread.anchor` reports whether a last Java frame has
been recorded. Its `clear()` resets it.

## Interpreter frames

```python
from minijvm.frame import FrameError, InterpreterFrame

frame = InterpreterFrame(bytes([0x06, 0x07, 0x60]), max_locals=4, max_stack=4)

frame.set_local_int(0, 42)
frame.push_int(10)
frame.push_int(20)
frame.peek_int(1)          # 10
frame.pop_int()            # 20

frame.current_bytecode()   # 0x06
frame.advance(1)
frame.bci()                # 1
```

The constructor also accepts these keyword arguments:

- `constants`: an arbitrary constant pool object, which is kept as is.
- `caller`: the calling frame.
- `method_name`: used by `describe()`.

Operands are read relative to the current position, in big-endian order:
`read_u1`, `read_s1`, `read_u2`, `read_s2` and `read_s4`. `jump_to` sets an
absolute position.

Locals and stack entries are one slot each. `long` and `double` values take
two slots, and their value is kept in the first. The typed accessors are:

- For locals: `local_int` / `set_local_int`, `local_long` /
  `set_local_long`, `local_float` / `set_local_float`, `local_double` /
  `set_local_double`, and `local_oop` / `set_local_oop`.
- For the operand stack: `push_*`, `pop_*`, and `peek_int` / `peek_raw`.

Integers wrap to their Java widths, and floats are kept as IEEE bit patterns.
A null reference reads back as `None`.

`FrameError` is raised in each of these cases:

- a local index outside `max_locals`
- a push past `max_stack`
- a pop or peek below the bottom of the stack
- a bytecode read outside the code

`describe()` returns a multi-line dump of the position, locals and stack.

## What this package does not do

It has no class file reader, no bytecode interpreter, no heap and no launcher
command. It parses arguments and models threads and frames, but nothing here
loads or runs a Java class. `usage()` only returns help text.