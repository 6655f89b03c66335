"""
Tests for the recommendation engine orchestrator.

Covers:
- The baseline, absent-profile and invalid-profile scenarios
- Determinism under an injected clock and id factory
- Atomic failure (no generator runs for an invalid profile)
- The camelCase JSON shape handed to the web client
"""

import itertools
from collections.abc import Callable
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from healthplan.config import EngineConfig
from healthplan.domain.errors import InvalidProfileError
from healthplan.domain.models import HealthDerivatives, HealthProfile
from healthplan.services.clock import FixedClock
from healthplan.services.engine import RecommendationEngine, compute_health_derivatives


def sequential_ids() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def engine(fixed_clock: FixedClock) -> RecommendationEngine:
    return RecommendationEngine(clock=fixed_clock)


@pytest.fixture
def forbid_generators(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Replace every generator with one that records it was called."""
    calls: list[str] = []

    def recorder(name: str) -> Callable[..., Any]:
        def _called(*args: Any, **kwargs: Any) -> Any:
            calls.append(name)
            raise AssertionError(f"{name} should not run")

        return _called

    for name in (
        "generate_water_schedule",
        "generate_exercise_recommendations",
        "generate_sleep_schedule",
        "generate_recommendations",
    ):
        monkeypatch.setattr(f"healthplan.services.engine.{name}", recorder(name))
    return calls


class TestScenarios:
    @pytest.mark.parametrize("sleep_hours,bedtime", [(7.5, "22:00"), (8.0, "22:30")])
    def test_boundary_profile(
        self,
        engine: RecommendationEngine,
        make_profile: Callable[..., HealthProfile],
        sleep_hours: float,
        bedtime: str,
    ) -> None:
        profile = make_profile(sleep_hours=sleep_hours)
        result = engine.compute(profile)

        assert profile.bmi == pytest.approx(24.22, abs=0.01)
        assert result.recommendations == ()
        assert len(result.exercise_recs) == 2
        assert len(result.water_schedule) == 8
        assert result.sleep_schedule is not None
        assert result.sleep_schedule.bedtime == bedtime
        assert not result.is_absent

    def test_absent_profile_runs_no_generator(
        self, engine: RecommendationEngine, forbid_generators: list[str]
    ) -> None:
        result = engine.compute(None)

        assert result == HealthDerivatives.absent()
        assert result.is_absent
        assert forbid_generators == []

    def test_zero_height_fails_atomically(
        self,
        engine: RecommendationEngine,
        baseline_data: dict,
        forbid_generators: list[str],
    ) -> None:
        with pytest.raises(InvalidProfileError) as exc_info:
            engine.compute({**baseline_data, "height": 0})

        assert "height" in exc_info.value.fields
        assert forbid_generators == []

    def test_constructed_instances_are_revalidated(
        self, engine: RecommendationEngine, baseline_data: dict
    ) -> None:
        unchecked = HealthProfile.model_construct(**{**baseline_data, "height": 0.0})
        with pytest.raises(InvalidProfileError):
            engine.compute(unchecked)

    def test_rejects_non_profile_input(self, engine: RecommendationEngine) -> None:
        with pytest.raises(InvalidProfileError, match="Expected a health profile"):
            engine.compute(42)  # type: ignore[arg-type]

    def test_accepts_client_payload(self, engine: RecommendationEngine) -> None:
        result = engine.compute(
            {
                "userId": "web-user",
                "height": 160,
                "weight": 80,
                "age": 45,
                "gender": "other",
                "sleepHours": 6,
                "waterIntake": 1,
                "heartRate": 72,
                "dailySteps": 4000,
                "activityLevel": "light",
                "smokes": False,
                "drinks": False,
            }
        )
        assert [rec.category for rec in result.recommendations] == ["Weight Loss", "Activity"]
        assert len(result.exercise_recs) == 3


class TestTryCompute:
    def test_ok_result(
        self, engine: RecommendationEngine, make_profile: Callable[..., HealthProfile]
    ) -> None:
        result = engine.try_compute(make_profile())
        assert result.is_ok()
        assert len(result.unwrap().water_schedule) == 8

    def test_error_result_carries_field_errors(
        self, engine: RecommendationEngine, baseline_data: dict
    ) -> None:
        result = engine.try_compute({**baseline_data, "weight": -3, "gender": "robot"})

        assert result.is_err()
        error = result.unwrap_err()
        assert isinstance(error, InvalidProfileError)
        assert {"weight", "gender"} <= set(error.fields)


class TestDeterminism:
    @given(
        weight=st.floats(min_value=30.0, max_value=200.0),
        heart_rate=st.floats(min_value=40.0, max_value=180.0),
        steps=st.integers(min_value=0, max_value=30000),
        smokes=st.booleans(),
    )
    def test_same_profile_same_clock_same_output(
        self,
        make_profile: Callable[..., HealthProfile],
        fixed_clock: FixedClock,
        weight: float,
        heart_rate: float,
        steps: int,
        smokes: bool,
    ) -> None:
        profile = make_profile(
            weight=weight, heart_rate=heart_rate, daily_steps=steps, smokes=smokes
        )
        first = RecommendationEngine(fixed_clock, sequential_ids()).compute(profile)
        second = RecommendationEngine(fixed_clock, sequential_ids()).compute(profile)

        assert first.model_dump_json() == second.model_dump_json()

    def test_default_ids_differ_but_nothing_else(
        self, engine: RecommendationEngine, make_profile: Callable[..., HealthProfile]
    ) -> None:
        profile = make_profile(smokes=True, weight=90.0)
        without_ids = {"recommendations": {"__all__": {"id"}}}
        first = engine.compute(profile).model_dump(exclude=without_ids)
        second = engine.compute(profile).model_dump(exclude=without_ids)

        assert first == second

    @given(
        height=st.floats(min_value=140.0, max_value=210.0),
        bmi=st.floats(min_value=15.0, max_value=24.9),
    )
    def test_crossing_bmi_25_adds_cardio_and_weight_loss(
        self,
        make_profile: Callable[..., HealthProfile],
        fixed_clock: FixedClock,
        height: float,
        bmi: float,
    ) -> None:
        height_m = height / 100
        lean = make_profile(height=height, weight=bmi * height_m * height_m)
        heavy = make_profile(height=height, weight=26.0 * height_m * height_m)
        engine = RecommendationEngine(fixed_clock)

        lean_result = engine.compute(lean)
        heavy_result = engine.compute(heavy)

        assert "Cardio" not in [e.category for e in lean_result.exercise_recs]
        assert "Weight Loss" not in [r.category for r in lean_result.recommendations]
        assert heavy_result.exercise_recs[0].category == "Cardio"
        assert "Weight Loss" in [r.category for r in heavy_result.recommendations]


class TestWiring:
    def test_module_entry_point(
        self, make_profile: Callable[..., HealthProfile], fixed_clock: FixedClock
    ) -> None:
        result = compute_health_derivatives(
            make_profile(smokes=True), clock=fixed_clock, id_factory=sequential_ids()
        )
        (rec,) = result.recommendations
        assert rec.id == "id-1"
        assert rec.created_at == fixed_clock.now()

    @pytest.mark.parametrize(
        "age,daily_steps,intensity,duration,categories",
        [
            (50.5, 8000.5, "low", 8.0, []),
            (24.5, 7999.5, "medium", 8.5, ["Activity"]),
        ],
    )
    def test_fractional_age_and_steps_pass_through(
        self,
        baseline_data: dict[str, Any],
        fixed_clock: FixedClock,
        age: float,
        daily_steps: float,
        intensity: str,
        duration: float,
        categories: list[str],
    ) -> None:
        payload = {**baseline_data, "age": age, "daily_steps": daily_steps}
        result = compute_health_derivatives(payload, clock=fixed_clock)

        strength = next(e for e in result.exercise_recs if e.category == "Strength")
        assert strength.intensity.value == intensity
        assert result.sleep_schedule is not None
        assert result.sleep_schedule.duration_hours == duration
        assert [rec.category for rec in result.recommendations] == categories

    def test_module_entry_point_with_no_profile(self) -> None:
        assert compute_health_derivatives(None).is_absent

    def test_config_id_prefix(
        self, make_profile: Callable[..., HealthProfile], fixed_clock: FixedClock
    ) -> None:
        engine = RecommendationEngine.from_config(EngineConfig(id_prefix="rec-"), clock=fixed_clock)
        (rec,) = engine.compute(make_profile(smokes=True)).recommendations
        assert rec.id.startswith("rec-")
        assert len(rec.id) > len("rec-")

    def test_json_shape_uses_client_names(
        self, engine: RecommendationEngine, make_profile: Callable[..., HealthProfile]
    ) -> None:
        data = engine.compute(make_profile(daily_steps=10)).model_dump(by_alias=True, mode="json")

        assert set(data) == {"recommendations", "waterSchedule", "exerciseRecs", "sleepSchedule"}
        assert set(data["sleepSchedule"]) == {"bedtime", "wakeTime", "durationHours", "phases"}
        assert set(data["sleepSchedule"]["phases"]) == {"windDown", "deepSleep", "lightSleep"}
        assert data["exerciseRecs"][0]["durationMinutes"] == 20
        assert data["recommendations"][0]["createdAt"].startswith("2024-01-01T08:00:00")
        assert data["recommendations"][0]["implemented"] is False

    def test_outputs_are_immutable(
        self, engine: RecommendationEngine, make_profile: Callable[..., HealthProfile]
    ) -> None:
        result = engine.compute(make_profile())
        assert isinstance(result.water_schedule, tuple)
        with pytest.raises(ValueError, match="frozen"):
            result.water_schedule[0].amount = 1  # type: ignore
