"""
Warmup ramps preceding the working sets.

Barbell lifts climb the standard plate-loading steps; cable lifts get two
ramp sets at fixed fractions of the working weight.  Bodyweight and cardio
work has no warmup.
"""

from .config import (
    BARBELL_WARMUP_MIN_TARGET,
    BARBELL_WARMUP_REPS,
    BARBELL_WARMUP_STEPS,
    CABLE_WARMUP_MIN_TARGET,
    CABLE_WARMUP_MIN_WEIGHT,
    CABLE_WARMUP_REST,
    CABLE_WARMUP_STEPS,
    HEAVY_WARMUP_REST,
    HEAVY_WARMUP_THRESHOLD,
    LIGHT_WARMUP_REST,
    WARMUP_CLOSE_FRACTION,
)
from .models import Category, WarmupStep
from .plates import round_to_cable


def _barbell_ramp(target: float) -> list[WarmupStep]:
    if target <= BARBELL_WARMUP_MIN_TARGET:
        return []

    steps: list[WarmupStep] = []
    for weight, reps in zip(BARBELL_WARMUP_STEPS, BARBELL_WARMUP_REPS):
        if weight >= target or weight >= target * WARMUP_CLOSE_FRACTION:
            break
        rest = HEAVY_WARMUP_REST if weight >= HEAVY_WARMUP_THRESHOLD else LIGHT_WARMUP_REST
        steps.append(WarmupStep(len(steps) + 1, float(weight), reps, rest))
    return steps


def _cable_ramp(target: float) -> list[WarmupStep]:
    if target <= CABLE_WARMUP_MIN_TARGET:
        return []

    steps: list[WarmupStep] = []
    for position, (fraction, reps) in enumerate(CABLE_WARMUP_STEPS):
        weight = round_to_cable(target * fraction)
        if weight < CABLE_WARMUP_MIN_WEIGHT:
            continue
        # Only the first ramp set may round up to the working weight
        if position > 0 and weight >= target:
            continue
        steps.append(WarmupStep(len(steps) + 1, weight, reps, CABLE_WARMUP_REST))
    return steps


def compute_warmups(target_weight: float, category: Category) -> list[WarmupStep]:
    """
    Warmup sets for a working weight.

    Args:
        target_weight: Working-set weight in lbs
        category: Exercise category

    Returns:
        Warmup steps with 1-based contiguous set numbers; empty when the
        category has no ramp or the weight is too light for one
    """
    if category is Category.BARBELL:
        return _barbell_ramp(target_weight)
    if category is Category.CABLE:
        return _cable_ramp(target_weight)
    return []
