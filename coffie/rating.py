"""Recipe ratings and their HTTP representations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from coffie.coffee import _payload_fields


@dataclass
class Rating:
    """A user's score on a recipe."""

    id: str
    recipe_id: str
    user_id: str
    score: int
    comment: str
    created_at: datetime


class RecipeAlreadyRatedError(Exception):
    """Raised when a user rates the same recipe twice."""

    def __init__(self, message: str = "user already rated this recipe") -> None:
        super().__init__(message)


class InvalidScoreError(ValueError):
    """Raised when a score is outside the allowed range."""

    def __init__(self, message: str = "score must be between 1 and 5") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class CreateRatingRequest:
    """Validated input for creating a rating."""

    recipe_id: str = ""
    user_id: str = ""
    score: int = 0
    comment: str = ""


_CREATE_RATING_FIELDS = {
    "score": ("score", int),
    "comment": ("comment", str),
}


@dataclass(frozen=True)
class CreateRating:
    """Body of POST /api/recipes/{id}/ratings."""

    score: int = 0
    comment: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> CreateRating:
        """Build from a decoded JSON value; raise ValueError on a wrong shape."""
        return cls(**_payload_fields(payload, _CREATE_RATING_FIELDS))


@dataclass(frozen=True)
class RatingUserBrief:
    """Minimal user information nested in a rating."""

    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class RatingResponse:
    """Representation of a single rating."""

    id: str
    user: RatingUserBrief
    score: int
    comment: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user": self.user.to_dict(),
            "score": self.score,
            "comment": self.comment,
            "created_at": self.created_at,
        }