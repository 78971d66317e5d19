"""
Meal entity: a single course served at a restaurant on a given date.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from welstory.core.exceptions import ParseError, RequestError, TransportError
from welstory.endpoints import Endpoints
from welstory.schemas import MealMenu, decode_meal_menu

if TYPE_CHECKING:
    from welstory.client import WelstoryClient
    from welstory.restaurant import WelstoryRestaurant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WelstoryMeal:
    """
    Meal returned by ``WelstoryRestaurant.list_meal``.

    Attributes:
        client: Client used for further calls
        restaurant: Restaurant serving the meal
        hall_no: Hall number
        date: Date as a YYYYMMDD integer
        meal_time_id: Meal time code
        name: Menu name
        menu_course_name: Course label (e.g. "Korean")
        menu_course_type: Course type code
        set_name: Set menu name, if any
        sub_menu_txt: Side dishes text, if any
        photo_url: Full photo URL
    """
    client: "WelstoryClient" = field(repr=False, compare=False)
    restaurant: "WelstoryRestaurant"
    hall_no: str
    date: int
    meal_time_id: str
    name: str
    menu_course_name: str
    menu_course_type: str
    set_name: Optional[str]
    sub_menu_txt: Optional[str]
    photo_url: str

    def _endpoint_args(self) -> tuple:
        return (
            self.date,
            self.meal_time_id,
            self.hall_no,
            self.menu_course_type,
            self.restaurant.id,
        )

    async def _get_json(self, endpoint: str, action: str) -> Any:
        try:
            response = await self.client.request(
                endpoint,
                headers={"Cookie": f"cafeteriaActiveId={self.restaurant.id}"},
            )
            return response.json()
        except (TransportError, ParseError) as e:
            raise RequestError(f"Failed to {action}: {e.message}") from e

    async def list_meal_menus(self) -> list[MealMenu]:
        """
        List the menu items of this meal with their nutrients.

        Returns an empty list when the response carries no ``data``.

        Raises:
            RequestError: On transport or parse failure
            DataFormatError: If an entry is malformed
        """
        body = await self._get_json(
            Endpoints.list_meal_nutrient(*self._endpoint_args()), "list meal menu"
        )
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            return []
        return [decode_meal_menu(raw) for raw in data]

    async def get_detail(self) -> Any:
        """
        Fetch the raw course detail payload of this meal.

        Returns:
            The ``data`` field of the response, None when absent
        """
        body = await self._get_json(
            Endpoints.list_meal_detail(*self._endpoint_args()), "get meal detail"
        )
        return body.get("data") if isinstance(body, dict) else None
