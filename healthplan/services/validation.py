"""Single validation gate for profiles entering the engine."""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from healthplan.domain.errors import InvalidProfileError
from healthplan.domain.models import HealthProfile

logger = structlog.get_logger(__name__)

ProfileInput = HealthProfile | Mapping[str, Any]


def validate_profile(profile: ProfileInput) -> HealthProfile:
    """
    Return a fully validated profile or raise InvalidProfileError.

    Existing HealthProfile instances are re-validated from their field values,
    since ``model_construct`` can produce instances that skipped validation.
    Mappings may use snake_case or the client's camelCase keys.
    """
    if isinstance(profile, HealthProfile):
        data: Any = dict(profile)
    elif isinstance(profile, Mapping):
        data = dict(profile)
    else:
        raise InvalidProfileError(
            f"Expected a health profile, got {type(profile).__name__}",
            [{"field": "profile", "message": "not a health profile"}],
        )

    try:
        return HealthProfile.model_validate(data)
    except ValidationError as e:
        error = InvalidProfileError.from_validation_error(e)
        logger.warning(
            "invalid_profile_rejected",
            user_id=data.get("user_id", data.get("userId")),
            errors=error.errors,
        )
        raise error from e
