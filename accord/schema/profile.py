"""Profile and preference inputs for compatibility scoring.

Invariants:
- Multi-select fields are always lists after validation, never bare scalars.
- age_min <= age_max on every Preferences instance.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from accord.utils.normalize import as_list, clean_str

PROFILE_LIST_FIELDS = (
    "gender",
    "sexual_orientation",
    "love_language",
    "ethnicity",
    "languages_spoken",
    "hobbies",
)

PREFERENCE_LIST_FIELDS = (
    "preferred_cities",
    "primary_reasons",
    "children_arrangement",
    "financial_arrangement",
    "housing_preference",
    "gender_preference",
)


class ScoringModel(BaseModel):
    """Base model that accepts ORM rows and ignores columns scoring never reads."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")


class Interests(ScoringModel):
    """Structured media interests; each list is compared case-insensitively."""

    movies: list[str] = Field(default_factory=list)
    music: list[str] = Field(default_factory=list)
    books: list[str] = Field(default_factory=list)
    tv_shows: list[str] = Field(default_factory=list)

    @field_validator("movies", "music", "books", "tv_shows", mode="before")
    @classmethod
    def _normalize_lists(cls, value: Any) -> list[str]:
        return as_list(value)


class Profile(ScoringModel):
    """One person's attributes relevant to matching."""

    id: str
    age: int = Field(gt=0)
    gender: list[str] = Field(default_factory=list)
    sexual_orientation: list[str] = Field(default_factory=list)

    location_city: Optional[str] = None
    location_state: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    height_inches: Optional[int] = None
    zodiac_sign: Optional[str] = None
    personality_type: Optional[str] = None
    love_language: list[str] = Field(default_factory=list)
    languages_spoken: list[str] = Field(default_factory=list)
    bio: Optional[str] = None
    hobbies: list[str] = Field(default_factory=list)
    interests: Interests = Field(default_factory=Interests)
    religion: Optional[str] = None
    political_views: Optional[str] = None
    ethnicity: list[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        """Accept UUIDs and ints from upstream stores as opaque strings."""
        return str(value)

    @field_validator(*PROFILE_LIST_FIELDS, mode="before")
    @classmethod
    def _normalize_multi_select(cls, value: Any) -> list[str]:
        return as_list(value)

    @field_validator(
        "location_city",
        "location_state",
        "zodiac_sign",
        "personality_type",
        "bio",
        "religion",
        "political_views",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        return clean_str(value)

    @field_validator("interests", mode="before")
    @classmethod
    def _default_interests(cls, value: Any) -> Any:
        """Legacy rows store interests as null or a flat list; neither carries structure."""
        if isinstance(value, (dict, Interests)):
            return value
        return {}


class Preferences(ScoringModel):
    """One profile's stated matching criteria."""

    max_distance_miles: int = 50
    willing_to_relocate: bool = False
    search_globally: bool = False
    preferred_cities: list[str] = Field(default_factory=list)

    primary_reasons: list[str] = Field(default_factory=list)
    relationship_type: Optional[str] = None
    wants_children: Optional[bool] = None
    children_arrangement: list[str] = Field(default_factory=list)

    financial_arrangement: list[str] = Field(default_factory=list)
    housing_preference: list[str] = Field(default_factory=list)

    smoking: Optional[str] = None
    drinking: Optional[str] = None
    pets: Optional[str] = None

    age_min: int = 18
    age_max: int = 99
    gender_preference: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_primary_reason(cls, data: Any) -> Any:
        """Older rows carry a single ``primary_reason`` column instead of the list."""
        if isinstance(data, dict) and "primary_reasons" not in data and "primary_reason" in data:
            data = {**data, "primary_reasons": data["primary_reason"]}
        return data

    @field_validator(*PREFERENCE_LIST_FIELDS, mode="before")
    @classmethod
    def _normalize_multi_select(cls, value: Any) -> list[str]:
        return as_list(value)

    @field_validator("relationship_type", "smoking", "drinking", "pets", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> str | None:
        text = clean_str(value)
        return text.lower() if text else None

    @field_validator("willing_to_relocate", "search_globally", mode="before")
    @classmethod
    def _null_flag_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("max_distance_miles", "age_min", "age_max", mode="before")
    @classmethod
    def _null_number_uses_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @model_validator(mode="after")
    def _validate_age_range(self) -> "Preferences":
        if self.age_min > self.age_max:
            raise ValueError(f"age_min ({self.age_min}) must not exceed age_max ({self.age_max})")
        return self
