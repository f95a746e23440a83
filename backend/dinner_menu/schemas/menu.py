from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DAYS_OF_WEEK = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
REQUIRED_ITEM_KEYS = ("day", "meal_name", "simple_description")


class TimeToMake(str, Enum):
    FIFTEEN = "15"
    THIRTY = "30"
    FORTY_FIVE_TO_SIXTY = "45"


class PriceRange(str, Enum):
    BUDGET = "budget"
    AVERAGE = "average"
    GOURMET = "gourmet"


class Restriction(str, Enum):
    GLUTEN_FREE = "gluten-free"
    DAIRY_FREE = "dairy-free"
    VEGETARIAN = "vegetarian"
    NUT_ALLERGY = "nut-allergy"
    SHELLFISH_ALLERGY = "shellfish-allergy"


class MenuPreferences(BaseModel):
    """What the user picked in the form; lives for one request."""

    time_to_make: TimeToMake = TimeToMake.THIRTY
    price_range: PriceRange = PriceRange.AVERAGE
    restrictions: list[Restriction] = []

    @field_validator("restrictions")
    @classmethod
    def _dedupe(cls, value: list[Restriction]) -> list[Restriction]:
        return list(dict.fromkeys(value))

    def toggle_restriction(self, restriction: Restriction | str) -> "MenuPreferences":
        restriction = Restriction(restriction)
        if restriction in self.restrictions:
            remaining = [r for r in self.restrictions if r != restriction]
        else:
            remaining = [*self.restrictions, restriction]
        return self.model_copy(update={"restrictions": remaining})


class MenuItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    day: str
    meal_name: str
    simple_description: str


class MenuRequest(BaseModel):
    """POST body. Everything is optional here; the route reports a missing prompt itself."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str | None = None
    time_to_make: str | None = Field(default=None, alias="timeToMake")
    price_range: str | None = Field(default=None, alias="priceRange")
    restrictions: list[str] | None = None


class MenuMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time_to_make: str | None = Field(default=None, alias="timeToMake")
    price_range: str | None = Field(default=None, alias="priceRange")
    restrictions: list[str] | None = None
    generated_at: datetime = Field(alias="generatedAt")


class MenuResponse(BaseModel):
    success: bool = True
    menu: list[MenuItem]
    metadata: MenuMetadata
