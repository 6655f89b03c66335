"""
Recommendation engine: one profile snapshot in, four derived plans out.

Key design decisions:
- Validation happens once, at entry, before any generator runs
- Generators are independent pure functions run in sequence
- An invalid profile fails the whole call; there are no partial results
- "No profile yet" is a normal state with its own empty result, not an error
"""

import time

import structlog

from healthplan.config import EngineConfig
from healthplan.domain.errors import InvalidProfileError
from healthplan.domain.models import HealthDerivatives
from healthplan.domain.result import Result
from healthplan.services.clock import Clock, SystemClock
from healthplan.services.exercise import generate_exercise_recommendations
from healthplan.services.recommendations import (
    IdFactory,
    generate_recommendations,
    new_recommendation_id,
)
from healthplan.services.sleep_schedule import generate_sleep_schedule
from healthplan.services.validation import ProfileInput, validate_profile
from healthplan.services.water_schedule import generate_water_schedule

logger = structlog.get_logger(__name__)


def prefixed_id_factory(prefix: str) -> IdFactory:
    if not prefix:
        return new_recommendation_id
    return lambda: f"{prefix}{new_recommendation_id()}"


class RecommendationEngine:
    """
    Orchestrates the water, exercise, sleep and recommendation generators.

    The engine holds no per-profile state, so one instance can serve any
    number of callers. The clock and id factory are injectable for tests.
    """

    def __init__(self, clock: Clock | None = None, id_factory: IdFactory | None = None) -> None:
        self.clock: Clock = clock or SystemClock()
        self.id_factory: IdFactory = id_factory or new_recommendation_id
        self.logger = logger.bind(component="recommendation_engine")

    @classmethod
    def from_config(
        cls, config: EngineConfig, clock: Clock | None = None
    ) -> "RecommendationEngine":
        return cls(clock=clock, id_factory=prefixed_id_factory(config.id_prefix))

    def compute(self, profile: ProfileInput | None) -> HealthDerivatives:
        """
        Derive every plan for ``profile``.

        Raises:
            InvalidProfileError: if the profile fails validation.
        """
        if profile is None:
            self.logger.debug("profile_absent")
            return HealthDerivatives.absent()

        start_time = time.perf_counter()
        valid = validate_profile(profile)
        created_at = self.clock.now()

        water_schedule = generate_water_schedule(valid)
        exercise_recs = generate_exercise_recommendations(valid)
        sleep_schedule = generate_sleep_schedule(valid)
        recommendations = generate_recommendations(
            valid, now=created_at, id_factory=self.id_factory
        )

        derivatives = HealthDerivatives(
            recommendations=tuple(recommendations),
            water_schedule=tuple(water_schedule),
            exercise_recs=tuple(exercise_recs),
            sleep_schedule=sleep_schedule,
        )

        self.logger.info(
            "health_derivatives_computed",
            user_id=valid.user_id,
            bmi=round(valid.bmi, 2),
            recommendations=len(recommendations),
            exercises=len(exercise_recs),
            duration_seconds=round(time.perf_counter() - start_time, 4),
        )
        return derivatives

    def try_compute(
        self, profile: ProfileInput | None
    ) -> Result[HealthDerivatives, InvalidProfileError]:
        """Like ``compute`` but returns rejection as a value instead of raising."""
        try:
            return Result.ok(self.compute(profile))
        except InvalidProfileError as e:
            return Result.err(e)


def compute_health_derivatives(
    profile: ProfileInput | None,
    *,
    clock: Clock | None = None,
    id_factory: IdFactory | None = None,
) -> HealthDerivatives:
    """Single entry point for callers that do not keep an engine around."""
    return RecommendationEngine(clock=clock, id_factory=id_factory).compute(profile)
