"""
Domain models for personal health planning.

These models represent the core business concepts and are framework-agnostic.
Every model is frozen: the engine receives a profile snapshot and hands back
fresh value objects, nothing is mutated in place.

Attribute names are snake_case; the camelCase names used by the web client
(``userId``, ``wakeTime`` ...) are accepted on input and available on output
via ``model_dump(by_alias=True)``.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

CLOCK_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    """Self-reported activity level, drives hydration targets."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Intensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Priority(str, Enum):
    """Coarse urgency tag. Drives display ordering only, never engine behavior."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecommendationType(str, Enum):
    WATER = "water"
    EXERCISE = "exercise"
    SLEEP = "sleep"
    NUTRITION = "nutrition"
    GENERAL = "general"


class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"

    @classmethod
    def from_bmi(cls, bmi: float) -> "BMICategory":
        if bmi < 18.5:
            return cls.UNDERWEIGHT
        if bmi < 25:
            return cls.NORMAL
        if bmi < 30:
            return cls.OVERWEIGHT
        return cls.OBESE


class HealthModel(BaseModel):
    """Base for every domain model: immutable, finite floats, camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        allow_inf_nan=False,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Values the profile form starts from before the user edits anything
PROFILE_FORM_DEFAULTS: dict[str, Any] = {
    "height": 170.0,
    "weight": 70.0,
    "age": 30,
    "gender": Gender.MALE,
    "sleep_hours": 8.0,
    "water_intake": 2.0,
    "heart_rate": 70.0,
    "daily_steps": 8000,
    "smokes": False,
    "drinks": False,
    "activity_level": ActivityLevel.MODERATE,
}


class HealthProfile(HealthModel):
    """Snapshot of one user's anthropometric and behavioral health data."""

    user_id: str = Field(min_length=1)

    height: float = Field(gt=0.0, description="Height in centimetres")
    weight: float = Field(gt=0.0, description="Weight in kilograms")
    age: float = Field(ge=0.0, description="Age in years, fractions allowed")
    gender: Gender

    sleep_hours: float = Field(ge=0.0, description="Hours of sleep per night")
    water_intake: float = Field(ge=0.0, description="Litres of water per day")
    heart_rate: float = Field(gt=0.0, description="Resting heart rate in bpm")
    daily_steps: float = Field(ge=0.0, description="Average steps per day")
    activity_level: ActivityLevel
    smokes: bool = False
    drinks: bool = False

    health_issues: frozenset[str] = Field(default_factory=frozenset)
    health_goals: frozenset[str] = Field(default_factory=frozenset)
    medications: frozenset[str] = Field(default_factory=frozenset)

    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("health_issues", "health_goals", "medications", mode="before")
    @classmethod
    def reject_duplicate_labels(cls, v: Any) -> Any:
        if isinstance(v, list | tuple):
            seen: set[str] = set()
            duplicates: set[str] = set()
            for label in v:
                if label in seen:
                    duplicates.add(label)
                seen.add(label)
            if duplicates:
                raise ValueError(f"duplicate labels: {', '.join(sorted(duplicates))}")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def bmi(self) -> float:
        """Body mass index, always derived from the current height and weight."""
        height_m = self.height / 100
        return self.weight / (height_m * height_m)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def bmi_category(self) -> BMICategory:
        return BMICategory.from_bmi(self.bmi)

    @classmethod
    def with_defaults(cls, user_id: str, **overrides: Any) -> "HealthProfile":
        """Build a profile from the form defaults, overriding selected fields."""
        return cls.model_validate({**PROFILE_FORM_DEFAULTS, "user_id": user_id, **overrides})


class WaterScheduleSlot(HealthModel):
    """A single scheduled hydration event."""

    time: str = Field(pattern=CLOCK_TIME_PATTERN)
    amount: float = Field(gt=0.0, description="Target volume in millilitres")
    reason: str


class HydrationProgress(HealthModel):
    total_ml: float = Field(ge=0.0)
    completed_ml: float = Field(ge=0.0)
    completed_slots: int = Field(ge=0)
    percentage: float = Field(ge=0.0, le=100.0)


class ExerciseRecommendation(HealthModel):
    name: str
    duration_minutes: int = Field(gt=0)
    intensity: Intensity
    time: str = Field(pattern=CLOCK_TIME_PATTERN)
    category: str
    instructions: str


class FitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class PlannedExercise(HealthModel):
    """One exercise inside a workout session."""

    name: str
    sets: int = Field(gt=0)
    reps: str = Field(description="Rep range or hold, e.g. '8-12' or '30-60 seconds'")
    duration_minutes: int | None = Field(default=None, gt=0)
    rest_seconds: int = Field(ge=0)
    instructions: str
    target_muscles: tuple[str, ...]
    equipment: str = "None"
    difficulty: Difficulty


class WorkoutSession(HealthModel):
    """A single day of the weekly training plan."""

    id: str = Field(min_length=1)
    name: str
    duration_minutes: int = Field(gt=0)
    difficulty: FitnessLevel
    focus: str
    calories: float = Field(ge=0.0, description="Estimated kcal burned")
    exercises: tuple[PlannedExercise, ...]


class SleepPhases(HealthModel):
    wind_down: str
    deep_sleep: str = Field(description="Window, e.g. 23:00-02:00")
    light_sleep: str = Field(description="Window, e.g. 05:00-07:00")


class SleepSchedule(HealthModel):
    bedtime: str = Field(pattern=CLOCK_TIME_PATTERN)
    wake_time: str = Field(pattern=CLOCK_TIME_PATTERN)
    duration_hours: float = Field(gt=0.0)
    phases: SleepPhases


class Recommendation(HealthModel):
    """Actionable advice produced by one engine run."""

    id: str = Field(min_length=1)
    type: RecommendationType
    title: str
    description: str
    schedule: str | None = None
    priority: Priority
    category: str
    # Owned by the caller after creation; the engine only ever sets False
    implemented: bool = False
    created_at: datetime


class HealthDerivatives(HealthModel):
    """Everything the engine derives from one profile snapshot."""

    recommendations: tuple[Recommendation, ...] = ()
    water_schedule: tuple[WaterScheduleSlot, ...] = ()
    exercise_recs: tuple[ExerciseRecommendation, ...] = ()
    sleep_schedule: SleepSchedule | None = None

    @classmethod
    def absent(cls) -> "HealthDerivatives":
        """Result for a caller that has no profile yet."""
        return cls()

    @property
    def is_absent(self) -> bool:
        # A present profile always yields a sleep schedule
        return self.sleep_schedule is None
