"""
Pydantic Schemas for API Payload Validation

Raw payload models mirror the service's JSON field names. The decode_*
functions are the only place raw payloads are checked; they return a
typed value or raise DataFormatError carrying the offending payload.

Value types returned to callers (MealTime, MealMenu) are plain
dataclasses.

Version: 1.0.0
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from welstory.core.exceptions import DataFormatError

logger = logging.getLogger(__name__)


def dump_payload(payload: Any) -> str:
    """JSON-dump a payload for error messages, falling back to repr."""
    try:
        return json.dumps(payload, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(payload)


# =============================================================================
# RAW PAYLOADS
# =============================================================================

class RawRestaurant(BaseModel):
    """Restaurant entry from the search response."""
    model_config = ConfigDict(extra="ignore")

    restaurantCode: StrictStr
    restaurantName: StrictStr
    restaurantDesc: StrictStr


class RawMeal(BaseModel):
    """Meal entry from ``data.mealList``."""
    model_config = ConfigDict(extra="ignore")

    hallNo: StrictStr
    menuName: StrictStr
    courseTxt: StrictStr
    menuCourseType: StrictStr
    photoUrl: StrictStr
    photoCd: StrictStr
    setMenuName: Optional[str] = None
    subMenuTxt: Optional[str] = None

    @field_validator("setMenuName", "subMenuTxt", mode="before")
    @classmethod
    def stringify_optional(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        return str(v)


class RawMealTime(BaseModel):
    """Meal time entry from the meal time list."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    code: str
    codeNm: str


class RawMealMenu(BaseModel):
    """Menu item entry from the nutrient detail response."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    menuName: str
    typicalMenu: Optional[str] = None
    kcal: Union[str, float, None] = None
    totCho: Union[str, float, None] = None
    totSugar: Union[str, float, None] = None
    totFib: Union[str, float, None] = None
    totFat: Union[str, float, None] = None
    totProtein: Union[str, float, None] = None


class UserInfo(BaseModel):
    """
    Login response body.

    login() returns the raw dict; callers who want typed access can
    validate it with ``UserInfo.model_validate(body)``.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = None
    biz_name: Optional[str] = Field(default=None, alias="bizName")
    gender: Optional[str] = None


# =============================================================================
# VALUE TYPES
# =============================================================================

@dataclass(frozen=True)
class MealTime:
    """
    Named time-of-day slot.

    Attributes:
        id: Meal time code
        name: Display name
    """
    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class MealMenu:
    """
    Nutritional breakdown of one menu item.

    Attributes:
        name: Menu item name
        is_main: Whether this is the main dish of the course
        calorie: Energy in kcal
        carbohydrate: Carbohydrate in grams
        sugar: Sugar in grams
        fiber: Fiber in grams
        fat: Fat in grams
        protein: Protein in grams
    """
    name: str
    is_main: bool
    calorie: float
    carbohydrate: float
    sugar: float
    fiber: float
    fat: float
    protein: float

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "is_main": self.is_main,
            "calorie": self.calorie,
            "carbohydrate": self.carbohydrate,
            "sugar": self.sugar,
            "fiber": self.fiber,
            "fat": self.fat,
            "protein": self.protein,
        }


# =============================================================================
# DECODERS
# =============================================================================

def _validate(model: type[BaseModel], raw: Any, label: str):
    if not isinstance(raw, dict):
        logger.warning(f"Invalid {label} data format: expected object")
        raise DataFormatError(
            f"Invalid {label} data format: {dump_payload(raw)}",
            details={"payload": raw},
        )
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Invalid {label} data format: {e.error_count()} error(s)")
        raise DataFormatError(
            f"Invalid {label} data format: {dump_payload(raw)}",
            details={"payload": raw, "errors": e.errors(include_url=False)},
        ) from e


def decode_restaurant(raw: Any) -> RawRestaurant:
    """Validate a search result entry."""
    return _validate(RawRestaurant, raw, "restaurant")


def decode_meal(raw: Any) -> RawMeal:
    """Validate a meal list entry."""
    return _validate(RawMeal, raw, "meal")


def decode_meal_time(raw: Any) -> MealTime:
    """Validate a meal time entry and map code/codeNm."""
    parsed = _validate(RawMealTime, raw, "meal time")
    return MealTime(id=parsed.code, name=parsed.codeNm)


def parse_decimal(value: Union[str, float, None], field_name: str, strip_commas: bool = False) -> float:
    """
    Parse a decimal string as returned by the service.

    Missing or blank values count as 0.

    Raises:
        DataFormatError: If the value is not numeric
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = value.replace(",", "") if strip_commas else value
    text = text.strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError as e:
        raise DataFormatError(
            f"Invalid numeric value for {field_name}: {value!r}",
            details={"field": field_name, "value": value},
        ) from e


def decode_meal_menu(raw: Any) -> MealMenu:
    """Validate a nutrient entry and convert its numeric fields."""
    parsed = _validate(RawMealMenu, raw, "meal menu")
    return MealMenu(
        name=parsed.menuName,
        is_main=parsed.typicalMenu == "Y",
        calorie=parse_decimal(parsed.kcal, "kcal", strip_commas=True),
        carbohydrate=parse_decimal(parsed.totCho, "totCho"),
        sugar=parse_decimal(parsed.totSugar, "totSugar"),
        fiber=parse_decimal(parsed.totFib, "totFib"),
        fat=parse_decimal(parsed.totFat, "totFat"),
        protein=parse_decimal(parsed.totProtein, "totProtein"),
    )
