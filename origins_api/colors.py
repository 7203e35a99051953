"""
Intensity and color mapping for the country grid.

A country's intensity is its share of the busiest country's count, and the
color is a straight RGB interpolation from light green (nobody yet) to
dark green (the busiest country).
"""

import math

LIGHT_GREEN = (232, 245, 233)
DARK_GREEN = (27, 94, 32)


def intensity(count: int, max_count: int) -> float:
    """count / max(max_count, 1), clamped to [0, 1]."""
    value = count / max(max_count, 1)
    return min(1.0, max(0.0, value))


def color_for_intensity(value: float) -> str:
    """CSS rgb() string for an intensity. Out-of-range input is clamped."""
    value = min(1.0, max(0.0, value))
    r, g, b = (
        math.floor(start - (start - end) * value)
        for start, end in zip(LIGHT_GREEN, DARK_GREEN)
    )
    return f"rgb({r}, {g}, {b})"


def country_color(count: int, max_count: int) -> str:
    return color_for_intensity(intensity(count, max_count))
