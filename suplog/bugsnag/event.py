"""The payload of a single error report and how it is built from raw data."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

from .configuration import Configuration
from .errors import TracedError, new_error
from .metadata import MetaData


class Severity(enum.Enum):
    """How bad an error is; pass one as raw data to override the default."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def __str__(self) -> str:
        return self.value


class SeverityReason(str, enum.Enum):
    """Why a report has the severity it has."""

    CALLBACK_SPECIFIED = "userCallbackSetSeverity"
    HANDLED_ERROR = "handledError"
    HANDLED_PANIC = "handledPanic"
    UNHANDLED_ERROR = "unhandledError"
    UNHANDLED_MIDDLEWARE_ERROR = "unhandledErrorMiddleware"
    UNHANDLED_PANIC = "unhandledPanic"
    USER_SPECIFIED = "userSpecifiedSeverity"


@dataclass
class HandledState:
    """The reason for a report's severity and the severity first assigned."""

    severity_reason: SeverityReason = SeverityReason.HANDLED_ERROR
    original_severity: Severity = Severity.WARNING
    unhandled: bool = False
    framework: str = ""


@dataclass
class User:
    """Searchable data about the user affected by an error."""

    id: str = field(default="", metadata={"json": "id,omitempty"})
    name: str = field(default="", metadata={"json": "name,omitempty"})
    email: str = field(default="", metadata={"json": "email,omitempty"})


@dataclass
class Context:
    """The part of the application an error happened in."""

    string: str = ""


@dataclass
class ErrorClass:
    """Overrides the class an error is grouped under."""

    name: str = ""


@dataclass
class EventStackFrame:
    """A stack frame in the form the report carries."""

    method: str = field(default="", metadata={"json": "method"})
    file: str = field(default="", metadata={"json": "file"})
    line_number: int = field(default=0, metadata={"json": "lineNumber"})
    in_project: bool = field(default=False, metadata={"json": "inProject,omitempty"})


@dataclass
class Event:
    """Everything that is sent about one error; handed to each before-notify callback."""

    error: Optional[TracedError] = None
    raw_data: List[Any] = field(default_factory=list)
    error_class: str = ""
    message: str = ""
    stacktrace: List[EventStackFrame] = field(default_factory=list)
    context: str = ""
    severity: Severity = Severity.WARNING
    grouping_hash: str = ""
    user: Optional[User] = None
    meta_data: MetaData = field(default_factory=MetaData)
    handled_state: HandledState = field(default_factory=HandledState)


def new_event(
    raw_data: Iterable[Any], config: Configuration
) -> Tuple[Event, Configuration]:
    """Build an event from raw data and return it with the configuration to use.

    Errors, severities, contexts, configurations, meta-data, users, error
    classes and handled states among ``raw_data`` shape the event; a bool
    sets whether the report is sent synchronously. Other values are kept in
    ``raw_data`` only.
    """
    event = Event(raw_data=list(raw_data))
    err: Optional[TracedError] = None

    for datum in event.raw_data:
        match datum:
            case BaseException():
                err = new_error(datum, 1)
                event.error = err
                if not event.error_class:
                    event.error_class = err.type_name()
                event.message = str(err)
            case bool():
                config = config.merge(Configuration(synchronous=datum))
            case Severity():
                event.severity = datum
                event.handled_state.original_severity = datum
                event.handled_state.severity_reason = SeverityReason.USER_SPECIFIED
            case Context():
                event.context = datum.string
            case Configuration():
                config = config.merge(datum)
            case MetaData():
                event.meta_data.merge(datum)
            case User():
                event.user = datum
            case ErrorClass():
                event.error_class = datum.name
            case HandledState():
                event.handled_state = datum
                event.severity = datum.original_severity

    if err is not None:
        event.stacktrace = [_event_frame(frame, config) for frame in err.stack_frames()]
    return event, config


def _event_frame(frame: Any, config: Configuration) -> EventStackFrame:
    file = frame.file
    in_project = config.is_project_package(frame.package)
    idx = file.find(frame.package)
    if idx > -1:
        file = file[idx:]
    if in_project:
        file = config.strip_project_packages(file)
    return EventStackFrame(
        method=frame.name,
        file=file,
        line_number=frame.line_number,
        in_project=in_project,
    )