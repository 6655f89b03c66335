"""Domain errors raised by the recommendation engine."""

from typing import Any

from pydantic import ValidationError


class InvalidProfileError(ValueError):
    """
    A profile that the engine refuses to derive anything from.

    ``errors`` holds one ``{"field", "message"}`` entry per offending field so the
    application layer can map them onto form-field feedback.
    """

    def __init__(self, message: str, errors: list[dict[str, str]] | None = None) -> None:
        super().__init__(message)
        self.errors: list[dict[str, str]] = errors or []

    @property
    def fields(self) -> list[str]:
        return [error["field"] for error in self.errors]

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidProfileError":
        errors = [_describe(detail) for detail in exc.errors()]
        summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        return cls(f"Invalid health profile ({summary})", errors)


def _describe(detail: Any) -> dict[str, str]:
    location = ".".join(str(part) for part in detail.get("loc", ()))
    return {"field": location or "profile", "message": detail.get("msg", "invalid value")}
