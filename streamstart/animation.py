"""Typewriter-style text animations: deleting, waiting and appending over time.

Times are seconds on a monotonic clock (for example ``time.monotonic()``),
durations are seconds.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Union

from .ease import in_sine

STEP_SECONDS = 1.5


@dataclass(frozen=True)
class DeleteRequest:
    """Shrink the text to ``desired_len`` characters over ``animation_duration``."""

    desired_len: int
    animation_duration: float


@dataclass(frozen=True)
class WaitRequest:
    """Keep the text unchanged for ``wait_time`` seconds."""

    wait_time: float


@dataclass(frozen=True)
class AppendRequest:
    """Type ``additional_chars`` onto the text over ``animation_duration``."""

    additional_chars: str
    animation_duration: float


AnimationRequest = Union[DeleteRequest, WaitRequest, AppendRequest]


def _time_factor(start: float, duration: float, now: float) -> float:
    if duration <= 0:
        return 1.0
    return min(max((now - start) / duration, 0.0), 1.0)


def _eased_count(total: int, factor: float) -> int:
    if factor >= 1.0:
        return total
    return int(total * in_sine(factor))


@dataclass
class DeleteOverTime:
    """Removes characters from the end of ``text`` with an ease-in curve."""

    text: str
    start_len: int
    desired_len: int
    animation_start: float
    animation_duration: float

    def __post_init__(self) -> None:
        if not 0 <= self.desired_len <= self.start_len:
            raise ValueError(
                f"cannot delete from length {self.start_len} to {self.desired_len}"
            )

    def update(self, now: float) -> None:
        deleted = _eased_count(self.start_len - self.desired_len, self.time_factor(now))
        self.text = self.text[: self.start_len - deleted]

    def time_factor(self, now: float) -> float:
        return _time_factor(self.animation_start, self.animation_duration, now)

    def finished(self, now: float) -> bool:
        return self.time_factor(now) >= 1.0

    def into_finished_string(self) -> str:
        self.update(self.animation_start + self.animation_duration)
        return self.text


@dataclass
class AppendOverTime:
    """Appends pending characters to ``text`` with an ease-in curve."""

    text: str
    start_len: int
    additional_characters: Deque[str] = field(default_factory=deque)
    animation_start: float = 0.0
    animation_duration: float = STEP_SECONDS

    def update(self, now: float) -> None:
        final_len = len(self.text) + len(self.additional_characters)
        desired_len = (
            _eased_count(final_len - self.start_len, self.time_factor(now))
            + self.start_len
        )
        missing = desired_len - len(self.text)
        if missing > 0:
            self.text += "".join(
                self.additional_characters.popleft() for _ in range(missing)
            )

    def time_factor(self, now: float) -> float:
        return _time_factor(self.animation_start, self.animation_duration, now)

    def finished(self, now: float) -> bool:
        return self.time_factor(now) >= 1.0

    def into_finished_string(self) -> str:
        self.update(self.animation_start + self.animation_duration)
        return self.text


@dataclass
class Wait:
    """Holds ``text`` unchanged until the moment ``until`` has passed."""

    text: str
    until: float
    last_update: Optional[float] = field(default=None, compare=False)

    def update(self, now: float) -> None:
        """Record the time of the latest update; the text stays as it is."""
        self.last_update = now

    def finished(self, now: float) -> bool:
        return now > self.until

    def into_finished_string(self) -> str:
        return self.text


@dataclass
class Static:
    """Text with no animation: a zero-length animation, always finished."""

    text: str
    last_update: Optional[float] = field(default=None, compare=False)

    def update(self, now: float) -> None:
        """Record the time of the latest update; the text stays as it is."""
        self.last_update = now

    def time_factor(self, now: float) -> float:
        return _time_factor(now, 0.0, now)

    def finished(self, now: float) -> bool:
        return self.time_factor(now) >= 1.0

    def into_finished_string(self) -> str:
        return self.text


Animation = Union[DeleteOverTime, AppendOverTime, Wait, Static]


def apply_animation_req(req: AnimationRequest, s: str, now: float) -> Animation:
    """Start the animation described by ``req`` on text ``s`` at time ``now``."""
    if isinstance(req, DeleteRequest):
        return DeleteOverTime(
            text=s,
            start_len=len(s),
            desired_len=req.desired_len,
            animation_start=now,
            animation_duration=req.animation_duration,
        )
    if isinstance(req, AppendRequest):
        return AppendOverTime(
            text=s,
            start_len=len(s),
            additional_characters=deque(req.additional_chars),
            animation_start=now,
            animation_duration=req.animation_duration,
        )
    if isinstance(req, WaitRequest):
        return Wait(text=s, until=now + req.wait_time)
    raise TypeError(f"unknown animation request: {req!r}")


def construct_animation_requests(current: str, desired: str) -> Deque[AnimationRequest]:
    """Plan the steps that turn ``current`` into ``desired``.

    Text past the first differing character is deleted and retyped. When no
    differing character is found among the overlapping ones, everything is
    retyped from the start.
    """
    first_differing = next(
        (i for i, (a, b) in enumerate(zip(current, desired)) if a != b), 0
    )

    requests: Deque[AnimationRequest] = deque()
    if current:
        requests.append(WaitRequest(wait_time=STEP_SECONDS))
        requests.append(
            DeleteRequest(desired_len=first_differing, animation_duration=STEP_SECONDS)
        )
    requests.append(
        AppendRequest(
            additional_chars=desired[first_differing:],
            animation_duration=STEP_SECONDS,
        )
    )
    return requests