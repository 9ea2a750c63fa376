"""Easing curves mapping a 0..1 progress value onto a 0..1 output."""

import math


def in_sine(val: float) -> float:
    """Sine ease-in: slow start, fast finish."""
    return 1.0 - math.cos((val * math.pi) / 2.0)