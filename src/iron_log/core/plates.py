"""
Plate and pin-stack arithmetic.

Breaks barbell loads into plates per side and rounds to what can actually
be loaded.
"""

import math

from .config import BAR_WEIGHT_LBS, CABLE_STACK_INCREMENT, PLATE_SIZES_LBS


def nearest_multiple(weight: float, step: float) -> float:
    """
    Round a non-negative weight to the nearest multiple of ``step``.

    Halves round up (112.5 → 115 for a 5 lb step), unlike the built-in
    ``round`` which rounds halves to even.
    """
    return math.floor(weight / step + 0.5) * step


def plate_breakdown(total_weight: float) -> list[tuple[float, int]]:
    """
    Greedy plate-per-side breakdown for a barbell load.

    Args:
        total_weight: Bar plus plates, in lbs

    Returns:
        [(plate_lbs, count_per_side), ...] heaviest first; empty for the
        empty bar or anything lighter
    """
    if total_weight <= BAR_WEIGHT_LBS:
        return []

    remaining = (total_weight - BAR_WEIGHT_LBS) / 2.0
    result: list[tuple[float, int]] = []
    for plate in PLATE_SIZES_LBS:
        count = int(remaining // plate)
        if count > 0:
            result.append((plate, count))
            remaining -= count * plate
            remaining = round(remaining, 1)  # float noise from 2.5s
    return result


def format_plates(breakdown: list[tuple[float, int]]) -> str:
    """Compact per-side label, e.g. ``45×2 + 10 + 2.5``."""
    if not breakdown:
        return "bar"
    parts = []
    for plate, count in breakdown:
        label = f"{plate:g}"
        parts.append(f"{label}×{count}" if count > 1 else label)
    return " + ".join(parts)


def round_to_cable(weight: float) -> float:
    """Nearest pin-stack weight."""
    return nearest_multiple(weight, CABLE_STACK_INCREMENT)
