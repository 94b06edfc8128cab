"""Callbacks run on each event before it is sent."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .configuration import Configuration
from .event import Event, SeverityReason

BeforeFunc = Callable[[Event, Configuration], Optional[BaseException]]
"""A callback that may change the event; returning an error cancels the report."""


@dataclass
class MiddlewareStack:
    """Before-notify callbacks, run newest first."""

    before: List[BeforeFunc] = field(default_factory=list)

    def on_before_notify(self, middleware: BeforeFunc) -> None:
        """Add a callback that runs before all those added earlier."""
        self.before.append(middleware)

    def run(
        self,
        event: Event,
        config: Configuration,
        next_callback: Callable[[], Optional[BaseException]],
    ) -> Optional[BaseException]:
        """Run every callback, then ``next_callback`` unless one returned an error."""
        for before in reversed(self.before):
            severity = event.severity
            err = self._run_before_filter(before, event, config)
            if err is not None:
                return err
            if event.severity != severity:
                event.handled_state.severity_reason = SeverityReason.CALLBACK_SPECIFIED
        return next_callback()

    @staticmethod
    def _run_before_filter(
        before: BeforeFunc, event: Event, config: Configuration
    ) -> Optional[BaseException]:
        try:
            return before(event, config)
        except Exception as exc:
            config.logf("bugsnag/middleware: unexpected panic: %s", exc)
            return None