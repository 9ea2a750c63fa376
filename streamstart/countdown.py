"""Countdown text for the pre-stream screen: arguments, text and its animation."""

from __future__ import annotations

import re
import sys
from collections import deque
from dataclasses import dataclass
from datetime import time
from typing import Deque, Iterable, Optional, Tuple

from .animation import (
    Animation,
    AnimationRequest,
    Static,
    apply_animation_req,
    construct_animation_requests,
)

CURSOR_BLINK_SECONDS = 0.5

_TIME_RE = re.compile(
    r"\s*([0-9]{1,2})\s*:\s*([0-9]{1,2})\s*:\s*([0-9]{1,2})(?:\.([0-9]{1,9}))?\s*",
    re.ASCII,
)


def _usage(process_name: str) -> str:
    return (
        "A pre-stream screen...\n"
        "\n"
        "Usage:\n"
        f"{process_name} [args]\n"
        "\n"
        "Arguments:\n"
        "--start-time: when stream starts\n"
        "--topic: what are we working on today\n"
    )


class UsageError(Exception):
    """Raised when the command line is invalid; carries the usage text."""

    def __init__(self, message: str, usage: str) -> None:
        super().__init__(message)
        self.message = message
        self.usage = usage

    def __str__(self) -> str:
        if self.message:
            return f"{self.message}\n{self.usage}"
        return self.usage


def _parse_time(value: str) -> time:
    match = _TIME_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid time: {value!r}")
    hour, minute, second = (int(group) for group in match.groups()[:3])
    fraction = match.group(4) or ""
    microsecond = int(fraction.ljust(6, "0")[:6]) if fraction else 0
    return time(hour, minute, second, microsecond)


@dataclass(frozen=True)
class Args:
    """Command line settings: when the stream starts and what it is about."""

    start_time: time
    topic: str

    @classmethod
    def parse(cls, argv: Optional[Iterable[str]] = None) -> Args:
        """Parse ``argv`` (process name first); raises UsageError when invalid."""
        it = iter(sys.argv if argv is None else argv)
        process_name = next(it, "prog")
        usage = _usage(process_name)

        start_time_arg: Optional[str] = None
        topic: Optional[str] = None
        for arg in it:
            if arg == "--start-time":
                start_time_arg = next(it, None)
            elif arg == "--topic":
                topic = next(it, None)
            else:
                raise UsageError("", usage)

        if start_time_arg is None:
            raise UsageError("Start time not provided", usage)
        try:
            start_time = _parse_time(start_time_arg)
        except ValueError as exc:
            raise UsageError(f"Failed to parse start time: {exc}", usage) from exc

        if topic is None:
            raise UsageError("Topic not provided", usage)

        return cls(start_time=start_time, topic=topic)


def _microseconds(t: time) -> int:
    return ((t.hour * 60 + t.minute) * 60 + t.second) * 1_000_000 + t.microsecond


def _trunc_div(a: int, b: int) -> int:
    return -((-a) // b) if a < 0 else a // b


def _trunc_rem(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def stream_starting_string(start_time: time, now: time, topic: str, program: str) -> str:
    """The terminal text shown on the screen, with the time left until the start."""
    remaining_us = _microseconds(start_time) - _microseconds(now)
    seconds = _trunc_div(remaining_us, 1_000_000)
    minutes = _trunc_div(seconds, 60)
    hours = _trunc_div(seconds, 3600)
    return (
        f"$ ./{program}\n"
        "\n"
        f"Today's topic: {topic}\n"
        f"Stream starting at {start_time.strftime('%H:%M:%S')}\n"
        f"Current time: {now.strftime('%H:%M:%S')}\n"
        f"{hours:02}:{_trunc_rem(minutes, 60):02}:{_trunc_rem(seconds, 60):02}"
        " 'till stream starts"
    )


def reset_animation(
    start_time: time, topic: str, current: str, now_time: time, program: str
) -> Tuple[Animation, Deque[AnimationRequest]]:
    """Hold ``current`` and plan the animation towards the fresh countdown text."""
    new_text = stream_starting_string(start_time, now_time, topic, program)
    return Static(current), construct_animation_requests(current, new_text)


class StartScreenText:
    """Animated countdown text and its blinking cursor.

    ``now`` values are monotonic seconds; ``now_time`` values are times of day.
    """

    def __init__(
        self,
        start_time: time,
        topic: str,
        program: str,
        now: float,
        now_time: time,
        cursor_blink: float = CURSOR_BLINK_SECONDS,
    ) -> None:
        self.start_time = start_time
        self.topic = topic
        self.program = program
        self.animation, self.queue = reset_animation(
            start_time, topic, "", now_time, program
        )
        self.cursor_blink = cursor_blink
        self._cursor_visible = False
        self._cursor_flip_time = now + cursor_blink

    @property
    def text(self) -> str:
        """The text as currently displayed."""
        return self.animation.text

    def update(self, now: float, now_time: time) -> None:
        """Advance the animation, starting the next step when one finishes."""
        if self.animation.finished(now):
            finished = self.animation.into_finished_string()
            if self.queue:
                self.animation = apply_animation_req(self.queue.popleft(), finished, now)
            else:
                self.animation, self.queue = reset_animation(
                    self.start_time, self.topic, finished, now_time, self.program
                )
                return
        self.animation.update(now)

    def cursor_visible(self, now: float) -> bool:
        """Whether the cursor shows at ``now``, toggling once per blink period."""
        if self._cursor_flip_time < now:
            self._cursor_flip_time += self.cursor_blink
            self._cursor_visible = not self._cursor_visible
        return self._cursor_visible