"""Command-line argument parsing for the virtual machine launcher."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

K = 1024
M = K * K
G = K * M

DEFAULT_CLASSPATH = "."
DEFAULT_HEAP_SIZE = 256 * M

_SIZE_SUFFIXES = {"k": K, "m": M, "g": G}
_SIZE_PATTERN = re.compile(r"\s*\+?(\d+)(.?)", re.DOTALL)

_USAGE = (
    "Usage: mini_jvm [options] <mainclass>\n"
    "\n"
    "Options:\n"
    "  -cp <path>        Set classpath (default: .)\n"
    "  -classpath <path> Set classpath (default: .)\n"
    "  -Xmx<size>        Set maximum heap size (e.g., 256m, 1g)\n"
    "  --test             Run regression tests\n"
    "\n"
    "Examples:\n"
    "  mini_jvm -cp test HelloWorld\n"
    "  mini_jvm -cp classes com/example/Main\n"
    "  mini_jvm -Xmx512m -cp . MyApp\n"
    "  mini_jvm --test\n"
)


class ArgumentError(ValueError):
    """Raised when the command line cannot be parsed."""


@dataclass
class Arguments:
    """The options accepted by the launcher."""

    classpath: str = DEFAULT_CLASSPATH
    main_class_name: Optional[str] = None
    heap_size: int = DEFAULT_HEAP_SIZE
    test_mode: bool = False


def parse_size(text: str) -> int:
    """Parse a size such as ``512``, ``64k``, ``256m`` or ``1g`` into bytes.

    Only the first character after the digits is taken as a suffix; anything
    following it is ignored.
    """
    match = _SIZE_PATTERN.match(text)
    if match is None:
        raise ArgumentError(f"no digits in size: {text!r}")
    value = int(match.group(1))
    suffix = match.group(2)
    if not suffix:
        return value
    multiplier = _SIZE_SUFFIXES.get(suffix.lower())
    if multiplier is None:
        raise ArgumentError(f"invalid size suffix in {text!r}")
    return value * multiplier


def parse_arguments(argv: Iterable[str]) -> Arguments:
    """Parse launcher arguments (without the program name)."""
    args = list(argv)
    if not args:
        raise ArgumentError("no arguments given")

    result = Arguments()
    remaining = iter(args)
    for arg in remaining:
        if arg == "--test":
            result.test_mode = True
            continue

        if arg in ("-cp", "-classpath"):
            try:
                result.classpath = next(remaining)
            except StopIteration:
                raise ArgumentError(f"{arg} requires a path argument") from None
            continue

        if arg.startswith("-Xmx"):
            try:
                size = parse_size(arg[4:])
            except ArgumentError:
                size = 0
            if size == 0:
                raise ArgumentError(f"Invalid heap size: {arg}")
            result.heap_size = size
            continue

        if arg.startswith("-"):
            raise ArgumentError(f"Unrecognized option: {arg}")

        result.main_class_name = arg

    if not result.test_mode and result.main_class_name is None:
        raise ArgumentError("no main class specified")
    return result


def usage() -> str:
    """Return the launcher's usage text."""
    return _USAGE