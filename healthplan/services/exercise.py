"""Exercise suggestions and the weekly workout plan, derived from BMI, age and activity."""

import structlog

from healthplan.domain.models import (
    ActivityLevel,
    Difficulty,
    ExerciseRecommendation,
    FitnessLevel,
    HealthProfile,
    Intensity,
    PlannedExercise,
    WorkoutSession,
)

logger = structlog.get_logger(__name__)

CARDIO_BMI_THRESHOLD = 25.0
SENIOR_AGE_THRESHOLD = 50


def _cardio() -> ExerciseRecommendation:
    return ExerciseRecommendation(
        name="Brisk Walking",
        duration_minutes=30,
        intensity=Intensity.MEDIUM,
        time="07:00",
        category="Cardio",
        instructions="Walk at a pace where you can still hold a conversation",
    )


def _strength(age: float) -> ExerciseRecommendation:
    return ExerciseRecommendation(
        name="Bodyweight Exercises",
        duration_minutes=20,
        intensity=Intensity.LOW if age > SENIOR_AGE_THRESHOLD else Intensity.MEDIUM,
        time="18:00",
        category="Strength",
        instructions="Include push-ups, squats, and planks. Start with 3 sets of 10.",
    )


def _flexibility() -> ExerciseRecommendation:
    return ExerciseRecommendation(
        name="Stretching & Yoga",
        duration_minutes=15,
        intensity=Intensity.LOW,
        time="21:00",
        category="Flexibility",
        instructions="Focus on major muscle groups. Hold each stretch for 30 seconds.",
    )


def generate_exercise_recommendations(profile: HealthProfile) -> list[ExerciseRecommendation]:
    """
    Two or three suggestions in a stable order: [cardio], strength, flexibility.

    Cardio is only suggested when BMI is above 25.
    """
    exercises: list[ExerciseRecommendation] = []
    if profile.bmi > CARDIO_BMI_THRESHOLD:
        exercises.append(_cardio())
    exercises.append(_strength(profile.age))
    exercises.append(_flexibility())

    logger.debug(
        "exercise_recommendations_generated",
        user_id=profile.user_id,
        count=len(exercises),
        bmi=round(profile.bmi, 2),
    )
    return exercises


FITNESS_LEVELS: dict[ActivityLevel, FitnessLevel] = {
    ActivityLevel.SEDENTARY: FitnessLevel.BEGINNER,
    ActivityLevel.LIGHT: FitnessLevel.INTERMEDIATE,
    ActivityLevel.MODERATE: FitnessLevel.INTERMEDIATE,
    ActivityLevel.ACTIVE: FitnessLevel.ADVANCED,
    ActivityLevel.VERY_ACTIVE: FitnessLevel.ADVANCED,
}

# kcal per kg of body weight per hour of session
CALORIE_FACTORS = {
    "strength": 0.5,
    "cardio": 0.8,
    "flexibility": 0.2,
}

PUSH_UP_VOLUME: dict[FitnessLevel, tuple[int, str]] = {
    FitnessLevel.BEGINNER: (2, "5-8"),
    FitnessLevel.INTERMEDIATE: (3, "8-12"),
    FitnessLevel.ADVANCED: (4, "12-15"),
}


def fitness_level(activity_level: ActivityLevel) -> FitnessLevel:
    return FITNESS_LEVELS[activity_level]


def _session_calories(weight: float, factor: float, duration_minutes: int) -> float:
    return weight * factor * duration_minutes / 60


def _strength_session(profile: HealthProfile, level: FitnessLevel) -> WorkoutSession:
    duration = 30 if profile.age > SENIOR_AGE_THRESHOLD else 45
    beginner = level is FitnessLevel.BEGINNER
    push_up_sets, push_up_reps = PUSH_UP_VOLUME[level]
    return WorkoutSession(
        id="day1",
        name="Full Body Strength",
        duration_minutes=duration,
        difficulty=level,
        focus="Strength Building",
        calories=_session_calories(profile.weight, CALORIE_FACTORS["strength"], duration),
        exercises=(
            PlannedExercise(
                name="Push-ups",
                sets=push_up_sets,
                reps=push_up_reps,
                rest_seconds=60,
                instructions="Keep your body straight, lower chest to ground, push back up",
                target_muscles=("Chest", "Shoulders", "Triceps"),
                difficulty=Difficulty.EASY if beginner else Difficulty.MEDIUM,
            ),
            PlannedExercise(
                name="Bodyweight Squats",
                sets=2 if beginner else 3,
                reps="8-10" if beginner else "12-15",
                rest_seconds=60,
                instructions=(
                    "Feet shoulder-width apart, lower hips back and down, return to standing"
                ),
                target_muscles=("Quadriceps", "Glutes", "Hamstrings"),
                difficulty=Difficulty.EASY,
            ),
            PlannedExercise(
                name="Plank",
                sets=2,
                reps="30-60 seconds",
                rest_seconds=60,
                instructions="Hold straight line from head to heels, engage core",
                target_muscles=("Core", "Shoulders"),
                difficulty=Difficulty.MEDIUM,
            ),
        ),
    )


def _cardio_session(profile: HealthProfile, level: FitnessLevel) -> WorkoutSession:
    elevated_bmi = profile.bmi > CARDIO_BMI_THRESHOLD
    duration = 35 if elevated_bmi else 30
    return WorkoutSession(
        id="day2",
        name="Cardio Blast",
        duration_minutes=duration,
        difficulty=level,
        focus="Cardiovascular Health",
        calories=_session_calories(profile.weight, CALORIE_FACTORS["cardio"], duration),
        exercises=(
            PlannedExercise(
                name="Brisk Walking",
                sets=1,
                reps="20-30 minutes",
                duration_minutes=30 if elevated_bmi else 20,
                rest_seconds=0,
                instructions="Maintain a pace where you can still hold a conversation",
                target_muscles=("Legs", "Cardiovascular"),
                difficulty=Difficulty.EASY,
            ),
            PlannedExercise(
                name="Jumping Jacks",
                sets=3,
                reps="10-15" if level is FitnessLevel.BEGINNER else "20-30",
                rest_seconds=45,
                instructions="Jump feet apart while raising arms overhead, return to start",
                target_muscles=("Full Body", "Cardiovascular"),
                difficulty=Difficulty.MEDIUM,
            ),
        ),
    )


def _recovery_session(profile: HealthProfile) -> WorkoutSession:
    duration = 25
    return WorkoutSession(
        id="day3",
        name="Flexibility & Recovery",
        duration_minutes=duration,
        difficulty=FitnessLevel.BEGINNER,
        focus="Flexibility & Mobility",
        calories=_session_calories(profile.weight, CALORIE_FACTORS["flexibility"], duration),
        exercises=(
            PlannedExercise(
                name="Cat-Cow Stretch",
                sets=2,
                reps="10-15",
                rest_seconds=30,
                instructions="On hands and knees, arch and round your back slowly",
                target_muscles=("Spine", "Core"),
                difficulty=Difficulty.EASY,
            ),
            PlannedExercise(
                name="Child's Pose",
                sets=2,
                reps="30-60 seconds",
                rest_seconds=30,
                instructions="Kneel and sit back on heels, stretch arms forward",
                target_muscles=("Back", "Shoulders"),
                difficulty=Difficulty.EASY,
            ),
        ),
    )


def generate_weekly_plan(profile: HealthProfile) -> list[WorkoutSession]:
    """
    Three sessions in a fixed order: strength, cardio, recovery.

    Volume scales with the fitness level implied by ``activity_level``.
    Strength sessions shorten above age 50 and cardio lengthens above BMI 25.
    Calories are ``weight * factor * minutes / 60`` with a per-session factor.
    """
    level = fitness_level(profile.activity_level)
    plan = [
        _strength_session(profile, level),
        _cardio_session(profile, level),
        _recovery_session(profile),
    ]

    logger.debug(
        "weekly_plan_generated",
        user_id=profile.user_id,
        fitness_level=level.value,
        total_minutes=sum(session.duration_minutes for session in plan),
    )
    return plan
