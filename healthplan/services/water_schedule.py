"""
Daily hydration schedule derived from body weight and activity level.

The day is split into eight fixed slots. The evening slot is deliberately
tapered to half a portion, so the schedule sums to slightly less than the
computed daily target.
"""

import math
from collections.abc import Iterable, Sequence

import structlog

from healthplan.domain.errors import InvalidProfileError
from healthplan.domain.models import (
    ActivityLevel,
    HealthProfile,
    HydrationProgress,
    WaterScheduleSlot,
)

logger = structlog.get_logger(__name__)

MIN_BASE_WATER_ML = 2000.0
ML_PER_KG = 35.0

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.LIGHT: 1.1,
    ActivityLevel.MODERATE: 1.2,
    ActivityLevel.ACTIVE: 1.3,
    ActivityLevel.VERY_ACTIVE: 1.4,
}

# (time, rationale) in the order the slots are emitted
SLOT_PLAN: tuple[tuple[str, str], ...] = (
    ("07:00", "Morning hydration boost"),
    ("09:00", "Pre-workout hydration"),
    ("11:00", "Mid-morning replenishment"),
    ("13:00", "Lunch hydration"),
    ("15:00", "Afternoon energy"),
    ("17:00", "Pre-dinner hydration"),
    ("19:00", "Evening hydration"),
    ("21:00", "Light evening sip"),
)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def daily_water_target_ml(profile: HealthProfile) -> float:
    """Total millilitres the profile should drink per day."""
    try:
        multiplier = ACTIVITY_MULTIPLIERS[profile.activity_level]
    except KeyError:
        raise InvalidProfileError(
            f"Unknown activity level: {profile.activity_level!r}",
            [{"field": "activity_level", "message": "unknown activity level"}],
        ) from None

    base_ml = max(MIN_BASE_WATER_ML, profile.weight * ML_PER_KG)
    return base_ml * multiplier


def generate_water_schedule(profile: HealthProfile) -> list[WaterScheduleSlot]:
    """Eight timed hydration targets, ascending from 07:00 to 21:00."""
    total_ml = daily_water_target_ml(profile)
    per_slot_ml = _round_half_up(total_ml / len(SLOT_PLAN))

    slots = [
        WaterScheduleSlot(time=time, amount=per_slot_ml, reason=reason)
        for time, reason in SLOT_PLAN[:-1]
    ]
    evening_time, evening_reason = SLOT_PLAN[-1]
    slots.append(
        WaterScheduleSlot(time=evening_time, amount=per_slot_ml / 2, reason=evening_reason)
    )

    logger.debug(
        "water_schedule_generated",
        user_id=profile.user_id,
        daily_target_ml=round(total_ml, 1),
        per_slot_ml=per_slot_ml,
    )
    return slots


def hydration_progress(
    schedule: Sequence[WaterScheduleSlot], completed_times: Iterable[str]
) -> HydrationProgress:
    """
    Summarise how much of a schedule has been ticked off.

    Times that do not appear in the schedule are ignored.
    """
    completed = set(completed_times)
    total_ml = sum(slot.amount for slot in schedule)
    done = [slot for slot in schedule if slot.time in completed]
    completed_ml = sum(slot.amount for slot in done)
    percentage = (completed_ml / total_ml) * 100 if total_ml > 0 else 0.0

    return HydrationProgress(
        total_ml=total_ml,
        completed_ml=completed_ml,
        completed_slots=len(done),
        percentage=percentage,
    )
