"""
Profile editing and the storage seam profiles reach the engine through.

Profiles are immutable: every edit produces a new validated snapshot with a
fresh ``last_updated`` stamp, and BMI follows height and weight automatically.
"""

from typing import Any, Literal, Protocol

import structlog

from healthplan.domain.errors import InvalidProfileError
from healthplan.domain.models import HealthProfile
from healthplan.domain.result import Result
from healthplan.services.clock import Clock, SystemClock
from healthplan.services.validation import ProfileInput, validate_profile

logger = structlog.get_logger(__name__)

LabelField = Literal["health_issues", "health_goals", "medications"]
LABEL_FIELDS: frozenset[str] = frozenset({"health_issues", "health_goals", "medications"})


def update_profile(
    profile: HealthProfile, *, clock: Clock | None = None, **changes: Any
) -> HealthProfile:
    """Apply field changes and stamp ``last_updated``."""
    unknown = sorted(set(changes) - set(HealthProfile.model_fields))
    if unknown:
        raise InvalidProfileError(
            f"Unknown profile fields: {', '.join(unknown)}",
            [{"field": name, "message": "not an editable profile field"} for name in unknown],
        )

    now = (clock or SystemClock()).now()
    return validate_profile({**dict(profile), **changes, "last_updated": now})


def toggle_label(
    profile: HealthProfile,
    field: LabelField,
    label: str,
    *,
    clock: Clock | None = None,
) -> HealthProfile:
    """Add ``label`` to one of the label sets, or remove it if already present."""
    if field not in LABEL_FIELDS:
        raise InvalidProfileError(
            f"{field} is not a label field",
            [{"field": field, "message": "not a label field"}],
        )

    current: frozenset[str] = getattr(profile, field)
    updated = current - {label} if label in current else current | {label}
    return update_profile(profile, clock=clock, **{field: updated})


class ProfileStore(Protocol):
    """
    Where profiles come from and go to.

    ``load`` returning None is the "no profile yet" state, which the engine
    answers with an empty result rather than an error.
    """

    def save(self, profile: ProfileInput) -> Result[HealthProfile, InvalidProfileError]: ...

    def load(self, user_id: str) -> HealthProfile | None: ...


class InMemoryProfileStore:
    """Keeps the latest snapshot per user in a dict. Nothing is written anywhere."""

    def __init__(self) -> None:
        self._profiles: dict[str, HealthProfile] = {}
        self.logger = logger.bind(component="in_memory_profile_store")

    def save(self, profile: ProfileInput) -> Result[HealthProfile, InvalidProfileError]:
        try:
            valid = validate_profile(profile)
        except InvalidProfileError as e:
            return Result.err(e)

        self._profiles[valid.user_id] = valid
        self.logger.info("profile_saved", user_id=valid.user_id)
        return Result.ok(valid)

    def load(self, user_id: str) -> HealthProfile | None:
        return self._profiles.get(user_id)

    def __len__(self) -> int:
        return len(self._profiles)
