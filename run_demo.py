"""
Console walkthrough of the recommendation engine.

This script shows:
1. Configuration loading and logging setup
2. Plans and weekly workouts derived for a few sample profiles
3. The "no profile yet" state
4. Rejection of an invalid profile

Run with: uv run python run_demo.py
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from healthplan.config import configure_logging, get_config
from healthplan.domain.errors import InvalidProfileError
from healthplan.domain.models import HealthDerivatives, HealthProfile
from healthplan.services.engine import RecommendationEngine
from healthplan.services.exercise import generate_weekly_plan
from healthplan.services.profiles import InMemoryProfileStore
from healthplan.services.water_schedule import hydration_progress

console = Console()

SAMPLE_PROFILES = [
    HealthProfile.with_defaults("demo-balanced", daily_steps=9000, sleep_hours=7.5),
    HealthProfile.with_defaults(
        "demo-at-risk",
        height=165,
        weight=92,
        age=58,
        heart_rate=104,
        daily_steps=3500,
        smokes=True,
        activity_level="sedentary",
        sleep_hours=6,
    ),
    HealthProfile.with_defaults(
        "demo-athlete",
        height=182,
        weight=78,
        age=22,
        activity_level="very_active",
        daily_steps=15000,
    ),
]


def render(profile: HealthProfile, derivatives: HealthDerivatives) -> None:
    console.print(
        Panel(
            f"{profile.user_id}: BMI {profile.bmi:.1f} ({profile.bmi_category.value}), "
            f"age {profile.age}, {profile.activity_level.value}",
            style="blue",
        )
    )

    water = Table(title="Water Schedule")
    water.add_column("Time", style="cyan")
    water.add_column("Amount (ml)", style="green")
    water.add_column("Reason", style="white")
    for slot in derivatives.water_schedule:
        water.add_row(slot.time, f"{slot.amount:g}", slot.reason)
    console.print(water)

    progress = hydration_progress(derivatives.water_schedule, ["07:00", "09:00"])
    console.print(
        f"After two slots: {progress.completed_ml:g}/{progress.total_ml:g} ml "
        f"({progress.percentage:.0f}%)"
    )

    exercises = Table(title="Exercise Plan")
    exercises.add_column("Time", style="cyan")
    exercises.add_column("Exercise", style="magenta")
    exercises.add_column("Minutes", style="green")
    exercises.add_column("Intensity", style="yellow")
    for exercise in derivatives.exercise_recs:
        exercises.add_row(
            exercise.time, exercise.name, str(exercise.duration_minutes), exercise.intensity.value
        )
    console.print(exercises)

    weekly = Table(title="Weekly Workouts")
    weekly.add_column("Session", style="magenta")
    weekly.add_column("Level", style="yellow")
    weekly.add_column("Minutes", style="green")
    weekly.add_column("kcal", style="red")
    weekly.add_column("Exercises", style="white")
    for session in generate_weekly_plan(profile):
        weekly.add_row(
            session.name,
            session.difficulty.value,
            str(session.duration_minutes),
            f"{session.calories:.0f}",
            ", ".join(f"{e.name} {e.sets}x{e.reps}" for e in session.exercises),
        )
    console.print(weekly)

    sleep = derivatives.sleep_schedule
    if sleep is not None:
        console.print(
            f"Sleep: {sleep.bedtime} -> {sleep.wake_time} ({sleep.duration_hours:g} h), "
            f"wind down {sleep.phases.wind_down}"
        )

    if derivatives.recommendations:
        recs = Table(title="Recommendations")
        recs.add_column("Priority", style="red")
        recs.add_column("Category", style="cyan")
        recs.add_column("Title", style="white")
        for rec in derivatives.recommendations:
            recs.add_row(rec.priority.value, rec.category, rec.title)
        console.print(recs)
    else:
        console.print("No recommendations - keep it up!", style="green")


def main() -> None:
    config = get_config()
    configure_logging(config.logging)
    console.print(Panel("Health Plan - Engine Walkthrough", style="bold blue"))
    console.print(f"Environment: {config.environment}, log level: {config.logging.level}")

    engine = RecommendationEngine.from_config(config.engine)
    store = InMemoryProfileStore()

    for profile in SAMPLE_PROFILES:
        store.save(profile).unwrap()
        stored = store.load(profile.user_id)
        render(profile, engine.compute(stored))

    console.print(Panel("No profile yet", style="blue"))
    absent = engine.compute(store.load("unknown-user"))
    console.print(f"Absent result: {absent.is_absent}")

    console.print(Panel("Invalid profile", style="blue"))
    result = engine.try_compute({**dict(SAMPLE_PROFILES[0]), "height": 0})
    if result.is_err():
        error: InvalidProfileError = result.unwrap_err()
        for field_error in error.errors:
            console.print(f"{field_error['field']}: {field_error['message']}", style="red")


if __name__ == "__main__":
    main()
