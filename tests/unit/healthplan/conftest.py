"""Shared fixtures for healthplan unit tests."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from healthplan.domain.models import HealthProfile
from healthplan.services.clock import FixedClock

FIXED_INSTANT = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)

# 170 cm / 70 kg sits just under the BMI 25 threshold (~24.22)
BASELINE_PROFILE: dict[str, Any] = {
    "user_id": "user-1",
    "height": 170.0,
    "weight": 70.0,
    "age": 30,
    "gender": "male",
    "sleep_hours": 7.0,
    "water_intake": 2.0,
    "heart_rate": 70.0,
    "daily_steps": 9000,
    "activity_level": "moderate",
    "smokes": False,
    "drinks": False,
    "last_updated": FIXED_INSTANT,
}


@pytest.fixture(scope="session")
def baseline_data() -> dict[str, Any]:
    """Raw field values of the baseline profile (copy before mutating)."""
    return dict(BASELINE_PROFILE)


@pytest.fixture(scope="session")
def make_profile() -> Callable[..., HealthProfile]:
    """Build a validated profile from the baseline with selected overrides.

    Session-scoped so hypothesis tests can use it.
    """

    def _make(**overrides: Any) -> HealthProfile:
        return HealthProfile.model_validate({**BASELINE_PROFILE, **overrides})

    return _make


@pytest.fixture(scope="session")
def fixed_clock() -> FixedClock:
    return FixedClock(FIXED_INSTANT)
