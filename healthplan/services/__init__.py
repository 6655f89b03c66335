"""
Core services for the application.

This package contains the generators that derive plans from a health profile
and the engine that orchestrates them.
"""

from .clock import Clock, FixedClock, SystemClock
from .engine import RecommendationEngine, compute_health_derivatives
from .exercise import fitness_level, generate_exercise_recommendations, generate_weekly_plan
from .profiles import InMemoryProfileStore, ProfileStore, toggle_label, update_profile
from .recommendations import (
    RECOMMENDATION_RULES,
    RecommendationRule,
    filter_by_priority,
    generate_recommendations,
)
from .sleep_schedule import generate_sleep_schedule, optimal_sleep_hours
from .validation import validate_profile
from .water_schedule import daily_water_target_ml, generate_water_schedule, hydration_progress

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "RecommendationEngine",
    "compute_health_derivatives",
    "fitness_level",
    "generate_exercise_recommendations",
    "generate_weekly_plan",
    "InMemoryProfileStore",
    "ProfileStore",
    "toggle_label",
    "update_profile",
    "RECOMMENDATION_RULES",
    "RecommendationRule",
    "filter_by_priority",
    "generate_recommendations",
    "generate_sleep_schedule",
    "optimal_sleep_hours",
    "validate_profile",
    "daily_water_target_ml",
    "generate_water_schedule",
    "hydration_progress",
]
