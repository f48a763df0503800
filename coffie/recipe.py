"""Brewing recipes and their HTTP representations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

from coffie.coffee import _payload_fields


@dataclass
class Recipe:
    """A coffee brewing recipe."""

    id: str
    user_id: str
    coffee_id: str
    method: str
    water_temp: int
    dose: float
    yield_: float
    brew_time: int
    description: str
    created_at: datetime
    updated_at: datetime


@dataclass
class RecipeSummary(Recipe):
    """A recipe with aggregated rating data for list views."""

    avg_rating: Optional[float] = None
    rating_count: int = 0


@dataclass
class RecipeWithDetails:
    """A recipe joined with its coffee, author and rating aggregates."""

    id: str
    user_id: str
    user_name: str
    coffee_id: str
    coffee_name: str
    coffee_brand: str
    method: str
    water_temp: int
    dose: float
    yield_: float
    brew_time: int
    description: str
    avg_rating: Optional[float]
    rating_count: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RecipeListFilter:
    """Optional filters for listing recipes."""

    user_id: str = ""
    method: str = ""
    search: str = ""
    page: int = 0
    limit: int = 0


class RecipeNotFoundError(LookupError):
    """Raised when a recipe does not exist."""

    def __init__(self, message: str = "recipe not found") -> None:
        super().__init__(message)


class UnauthorizedError(PermissionError):
    """Raised when a user may not modify a recipe."""

    def __init__(self, message: str = "not authorized to modify this recipe") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class CreateRecipeRequest:
    """Validated input for creating a recipe."""

    user_id: str = ""
    coffee_id: str = ""
    method: str = ""
    water_temp: int = 0
    dose: float = 0.0
    yield_: float = 0.0
    brew_time: int = 0
    description: str = ""


@dataclass(frozen=True)
class UpdateRecipeRequest:
    """Validated input for updating a recipe; None leaves a field unchanged."""

    method: Optional[str] = None
    water_temp: Optional[int] = None
    dose: Optional[float] = None
    yield_: Optional[float] = None
    brew_time: Optional[int] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ListRecipesRequest:
    """Validated query parameters for listing recipes."""

    user_id: str = ""
    method: str = ""
    search: str = ""
    page: int = 0
    limit: int = 0


_CREATE_RECIPE_FIELDS = {
    "coffee_id": ("coffee_id", str),
    "method": ("method", str),
    "water_temp": ("water_temp", int),
    "dose": ("dose", float),
    "yield": ("yield_", float),
    "brew_time": ("brew_time", int),
    "description": ("description", str),
}

_UPDATE_RECIPE_FIELDS = {
    "method": ("method", str),
    "water_temp": ("water_temp", int),
    "dose": ("dose", float),
    "yield": ("yield_", float),
    "brew_time": ("brew_time", int),
    "description": ("description", str),
}


@dataclass(frozen=True)
class CreateRecipe:
    """Body of POST /api/recipes."""

    coffee_id: str = ""
    method: str = ""
    water_temp: int = 0
    dose: float = 0.0
    yield_: float = 0.0
    brew_time: int = 0
    description: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> CreateRecipe:
        """Build from a decoded JSON value; raise ValueError on a wrong shape."""
        return cls(**_payload_fields(payload, _CREATE_RECIPE_FIELDS))


@dataclass(frozen=True)
class UpdateRecipe:
    """Body of PUT /api/recipes/{id}; absent fields are None."""

    method: Optional[str] = None
    water_temp: Optional[int] = None
    dose: Optional[float] = None
    yield_: Optional[float] = None
    brew_time: Optional[int] = None
    description: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> UpdateRecipe:
        """Build from a decoded JSON value; raise ValueError on a wrong shape."""
        return cls(**_payload_fields(payload, _UPDATE_RECIPE_FIELDS))

    def to_dict(self) -> dict[str, Any]:
        """Wire form, leaving out fields that are not set."""
        return {
            json_name: getattr(self, attribute)
            for json_name, (attribute, _) in _UPDATE_RECIPE_FIELDS.items()
            if getattr(self, attribute) is not None
        }


@dataclass(frozen=True)
class ListRecipes:
    """Query parameters of GET /api/recipes."""

    user_id: str = ""
    method: str = ""
    search: str = ""
    page: int = 0
    limit: int = 0


@dataclass(frozen=True)
class UserBrief:
    """Minimal user information in nested responses."""

    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class CoffeeBrief:
    """Minimal coffee information in nested responses."""

    id: str
    name: str
    brand: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "brand": self.brand}


@dataclass(frozen=True)
class RecipeResponse:
    """Full recipe detail."""

    id: str
    user: UserBrief
    coffee: CoffeeBrief
    method: str
    water_temp: int
    dose: float
    yield_: float
    brew_time: int
    description: str
    avg_rating: Optional[float]
    rating_count: int
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user": self.user.to_dict(),
            "coffee": self.coffee.to_dict(),
            "method": self.method,
            "water_temp": self.water_temp,
            "dose": self.dose,
            "yield": self.yield_,
            "brew_time": self.brew_time,
            "description": self.description,
            "avg_rating": self.avg_rating,
            "rating_count": self.rating_count,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class RecipeListItem:
    """Summarized recipe for list views."""

    id: str
    user: UserBrief
    coffee: CoffeeBrief
    method: str
    avg_rating: Optional[float]
    rating_count: int
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user": self.user.to_dict(),
            "coffee": self.coffee.to_dict(),
            "method": self.method,
            "avg_rating": self.avg_rating,
            "rating_count": self.rating_count,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class RecipeListEnvelope:
    """A page of recipes with the total count."""

    items: Sequence[RecipeListItem] = field(default_factory=tuple)
    total: int = 0
    page: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "page": self.page,
        }