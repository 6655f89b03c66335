"""
Prioritised health recommendations from a declarative rule table.

Each rule pairs a predicate over the profile with the template of the advice
it produces. Rules are evaluated independently and in table order; adding a
rule means appending to ``RECOMMENDATION_RULES``, not touching control flow.
"""

import uuid
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

import structlog

from healthplan.domain.models import (
    HealthProfile,
    Priority,
    Recommendation,
    RecommendationType,
)

logger = structlog.get_logger(__name__)

IdFactory = Callable[[], str]


def new_recommendation_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class RecommendationTemplate:
    """Static content of a recommendation, stamped with id and time when it fires."""

    type: RecommendationType
    title: str
    description: str
    priority: Priority
    category: str
    schedule: str | None = None

    def build(self, recommendation_id: str, created_at: datetime) -> Recommendation:
        return Recommendation(
            id=recommendation_id,
            type=self.type,
            title=self.title,
            description=self.description,
            schedule=self.schedule,
            priority=self.priority,
            category=self.category,
            implemented=False,
            created_at=created_at,
        )


@dataclass(frozen=True)
class RecommendationRule:
    name: str
    applies: Callable[[HealthProfile], bool]
    template: RecommendationTemplate


RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        name="elevated_bmi",
        applies=lambda profile: profile.bmi > 25,
        template=RecommendationTemplate(
            type=RecommendationType.NUTRITION,
            title="Weight Management",
            description=(
                "Focus on portion control and increase fiber intake. "
                "Aim for 500-calorie deficit daily."
            ),
            priority=Priority.HIGH,
            category="Weight Loss",
        ),
    ),
    RecommendationRule(
        name="high_resting_heart_rate",
        applies=lambda profile: profile.heart_rate > 100,
        template=RecommendationTemplate(
            type=RecommendationType.GENERAL,
            title="Heart Rate Management",
            description=(
                "Consider stress reduction techniques and consult with healthcare provider."
            ),
            priority=Priority.HIGH,
            category="Cardiovascular",
        ),
    ),
    RecommendationRule(
        name="low_daily_steps",
        applies=lambda profile: profile.daily_steps < 8000,
        template=RecommendationTemplate(
            type=RecommendationType.EXERCISE,
            title="Increase Daily Activity",
            description=(
                "Aim for 10,000 steps daily. Take stairs, park farther, or walk during calls."
            ),
            schedule="Throughout the day",
            priority=Priority.MEDIUM,
            category="Activity",
        ),
    ),
    RecommendationRule(
        name="smoker",
        applies=lambda profile: profile.smokes,
        template=RecommendationTemplate(
            type=RecommendationType.GENERAL,
            title="Smoking Cessation",
            description=(
                "Consider joining a smoking cessation program. "
                "Your health will improve within weeks."
            ),
            priority=Priority.HIGH,
            category="Lifestyle",
        ),
    ),
)


def generate_recommendations(
    profile: HealthProfile,
    *,
    now: datetime,
    id_factory: IdFactory = new_recommendation_id,
    rules: Sequence[RecommendationRule] = RECOMMENDATION_RULES,
) -> list[Recommendation]:
    """Evaluate every rule from scratch; nothing is remembered between calls."""
    fired = [rule for rule in rules if rule.applies(profile)]
    recommendations = [rule.template.build(id_factory(), now) for rule in fired]

    logger.debug(
        "recommendations_generated",
        user_id=profile.user_id,
        fired_rules=[rule.name for rule in fired],
    )
    return recommendations


def filter_by_priority(
    recommendations: Iterable[Recommendation], priority: Priority | None = None
) -> list[Recommendation]:
    """Keep recommendations of one priority; ``None`` keeps all of them."""
    if priority is None:
        return list(recommendations)
    return [rec for rec in recommendations if rec.priority == priority]
