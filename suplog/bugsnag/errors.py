"""Errors that carry a stack trace, and parsing of panic output."""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass
from types import FrameType
from typing import Any, List, Optional, Sequence, Tuple

MAX_STACK_DEPTH = 50
"""The maximum number of stack frames recorded for an error."""

_LINE_NUMBER = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


@dataclass
class StackFrame:
    """One line of a call stack."""

    file: str = ""
    line_number: int = 0
    name: str = ""
    package: str = ""
    program_counter: int = 0

    def source_line(self) -> str:
        """Return the stripped source line of this frame; raise OSError if unreadable."""
        with open(self.file, "rb") as handle:
            data = handle.read()
        lines = data.split(b"\n")
        if self.line_number <= 0 or self.line_number >= len(lines):
            return "???"
        return lines[self.line_number - 1].strip(b" \t").decode("utf-8", "replace")

    def __str__(self) -> str:
        text = f"{self.file}:{self.line_number} (0x{self.program_counter:x})\n"
        try:
            source = self.source_line()
        except OSError:
            return text
        return text + f"\t{self.name}: {source}\n"


class UncaughtPanic(Exception):
    """An error recovered from the text of a crash report."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class PanicParseError(ValueError):
    """Raised when crash output cannot be parsed."""


class TracedError(Exception):
    """An error together with the stack it was raised or wrapped from."""

    def __init__(self, err: Any, frames: Optional[Sequence[StackFrame]] = None) -> None:
        super().__init__(err)
        self.err = err
        self._frames: List[StackFrame] = list(frames or [])

    def __str__(self) -> str:
        return str(self.err)

    def stack_frames(self) -> List[StackFrame]:
        """Return the recorded frames, innermost first."""
        return self._frames

    def stack(self) -> str:
        """Return the call stack as text, one frame after another."""
        return "".join(str(frame) for frame in self.stack_frames())

    def type_name(self) -> str:
        """Return the name of the wrapped error's type, or ``panic``."""
        if isinstance(self.err, UncaughtPanic):
            return "panic"
        cls = type(self.err)
        if cls.__module__ == "builtins":
            name = cls.__qualname__
        else:
            name = f"{cls.__module__}.{cls.__qualname__}"
        return name or "error"


def _split_package(name: str) -> Tuple[str, str]:
    package = ""
    slash = name.rfind("/")
    if slash >= 0:
        package += name[:slash] + "/"
        name = name[slash + 1:]
    period = name.find(".")
    if period >= 0:
        package += name[:period]
        name = name[period + 1:]
    return package, name.replace("·", ".")


def _frame_from(frame: FrameType) -> StackFrame:
    filename = frame.f_code.co_filename
    return StackFrame(
        file=filename,
        line_number=frame.f_lineno,
        name=frame.f_code.co_name,
        package=inspect.getmodulename(filename) or "",
        program_counter=frame.f_lasti,
    )


def _capture_stack(skip: int) -> List[StackFrame]:
    frame = inspect.currentframe()
    # step out of this helper and of new_error itself
    for _ in range(skip + 2):
        if frame is None:
            break
        frame = frame.f_back
    frames: List[StackFrame] = []
    while frame is not None and len(frames) < MAX_STACK_DEPTH:
        frames.append(_frame_from(frame))
        frame = frame.f_back
    del frame
    return frames


def new_error(value: Any, skip: int = 0) -> TracedError:
    """Wrap ``value`` in a TracedError.

    ``skip`` counts how many callers above the caller of this function are
    left out of the stack: 0 starts at the caller.
    """
    if isinstance(value, TracedError):
        return value
    frames_of = getattr(value, "stack_frames", None)
    if callable(frames_of):
        return TracedError(value, frames_of())
    if isinstance(value, BaseException):
        err: Any = value
    else:
        err = Exception("<nil>" if value is None else str(value))
    return TracedError(err, _capture_stack(skip))


def errorf(format: str, *args: Any) -> TracedError:
    """Return a TracedError whose message is ``format % args``."""
    message = format % args if args else format
    return new_error(Exception(message), 1)


def _parse_panic_frame(name: str, line: str, created_by: bool) -> StackFrame:
    idx = name.rfind("(")
    if idx == -1 and not created_by:
        raise PanicParseError(f"bugsnag.panicParser: Invalid line (no call): {name}")
    if idx != -1:
        name = name[:idx]
    package, name = _split_package(name)

    if not line.startswith("\t"):
        raise PanicParseError(f"bugsnag.panicParser: Invalid line (no tab): {line}")
    idx = line.rfind(":")
    if idx == -1:
        raise PanicParseError(
            f"bugsnag.panicParser: Invalid line (no line number): {line}"
        )
    file = line[1:idx]
    number = line[idx + 1:]
    cut = number.find(" +")
    if cut > -1:
        number = number[:cut]
    if not _LINE_NUMBER.fullmatch(number) or not (
        _INT32_MIN <= int(number) <= _INT32_MAX
    ):
        raise PanicParseError(
            f"bugsnag.panicParser: Invalid line (bad line number): {line}"
        )
    return StackFrame(file=file, line_number=int(number), package=package, name=name)


def parse_panic(text: str) -> TracedError:
    """Build an error from the output of a crashed program."""
    lines = iter(text.split("\n"))
    state = "start"
    message = ""
    stack: List[StackFrame] = []

    for line in lines:
        if state == "start":
            if not line.startswith("panic: "):
                raise PanicParseError(
                    f"bugsnag.panicParser: Invalid line (no prefix): {line}"
                )
            message = line[len("panic: "):]
            state = "seek"
        elif state == "seek":
            if line.startswith("goroutine ") and line.endswith("[running]:"):
                state = "parsing"
        else:
            if line == "":
                state = "done"
                break
            created_by = line.startswith("created by ")
            if created_by:
                line = line[len("created by "):]
            location = next(lines, None)
            if location is None:
                raise PanicParseError(
                    f"bugsnag.panicParser: Invalid line (unpaired): {line}"
                )
            stack.append(_parse_panic_frame(line, location, created_by))
            if created_by:
                state = "done"
                break

    if state in ("done", "parsing"):
        return TracedError(UncaughtPanic(message), stack)
    raise PanicParseError(f"could not parse panic: {text}")