"""Sleep schedule derived from age and current sleep habit."""

import structlog

from healthplan.domain.models import HealthProfile, SleepPhases, SleepSchedule

logger = structlog.get_logger(__name__)

# Phase markers are fixed and do not follow the chosen bedtime
SLEEP_PHASES = SleepPhases(
    wind_down="21:00",
    deep_sleep="23:00-02:00",
    light_sleep="05:00-07:00",
)

EARLY_WINDOW = ("22:00", "06:30")
REGULAR_WINDOW = ("22:30", "07:00")


def optimal_sleep_hours(age: float) -> float:
    if age < 25:
        return 8.5
    if age < 65:
        return 8.0
    return 7.5


def generate_sleep_schedule(profile: HealthProfile) -> SleepSchedule:
    """
    Target the age-appropriate optimum, not the user's current habit.

    Short sleepers get the earlier, longer window.
    """
    optimal = optimal_sleep_hours(profile.age)
    short_sleeper = profile.sleep_hours < optimal
    bedtime, wake_time = EARLY_WINDOW if short_sleeper else REGULAR_WINDOW

    logger.debug(
        "sleep_schedule_generated",
        user_id=profile.user_id,
        optimal_hours=optimal,
        short_sleeper=short_sleeper,
    )
    return SleepSchedule(
        bedtime=bedtime,
        wake_time=wake_time,
        duration_hours=optimal,
        phases=SLEEP_PHASES,
    )
