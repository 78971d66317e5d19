"""
Restaurant entity: registration state, meal times and meal listing.
"""

import json
import logging
import random
from typing import TYPE_CHECKING, Any, Optional

from welstory.core.exceptions import (
    AlreadyRegisteredError,
    DataFormatError,
    NotRegisteredError,
    ParseError,
    RegistrationError,
    RequestError,
    TransportError,
    UnregistrationError,
)
from welstory.endpoints import Endpoints
from welstory.meal import WelstoryMeal
from welstory.schemas import MealTime, decode_meal, decode_meal_time, dump_payload
from welstory.services.transport import HttpResponse

if TYPE_CHECKING:
    from welstory.client import WelstoryClient

logger = logging.getLogger(__name__)


class WelstoryRestaurant:
    """
    A cafeteria found through ``WelstoryClient.search_restaurant``.

    The client reference is only used to issue further calls.
    """

    __slots__ = ("_client", "_id", "_name", "_description")

    def __init__(self, client: "WelstoryClient", id: str, name: str, description: str):
        self._client = client
        self._id = id
        self._name = name
        self._description = description

    @property
    def client(self) -> "WelstoryClient":
        return self._client

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"WelstoryRestaurant(id={self._id!r}, name={self._name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WelstoryRestaurant):
            return NotImplemented
        return (self._id, self._name, self._description) == (
            other._id, other._name, other._description
        )

    def __hash__(self) -> int:
        return hash((self._id, self._name, self._description))

    def _cafeteria_cookie(self) -> dict[str, str]:
        return {"Cookie": f"cafeteriaActiveId={self._id}"}

    async def _get_json(self, endpoint: str, action: str, headers: Optional[dict] = None) -> Any:
        """GET an endpoint and parse its body, wrapping failures in RequestError."""
        try:
            response = await self._client.request(endpoint, headers=headers)
            return response.json()
        except (TransportError, ParseError) as e:
            raise RequestError(f"Failed to {action}: {e.message}") from e

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    async def check_is_registered(self) -> bool:
        """
        Check whether this restaurant is in the user's restaurant list.

        Raises:
            RequestError: On transport, HTTP or parse failure
        """
        action = "check if restaurant is registered"
        try:
            response = await self._client.request(Endpoints.LIST_MY_RESTAURANT)
            if not response.ok:
                raise RequestError(
                    f"Failed to {action}: {response.status_text}",
                    details={"status": response.status},
                )
            body = response.json()
        except (TransportError, ParseError) as e:
            raise RequestError(f"Failed to {action}: {e.message}") from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            return False

        count = sum(
            1 for entry in data
            if isinstance(entry, dict) and entry.get("restaurantId") == self._id
        )
        return count > 0

    async def _post_my_list(
        self, endpoint: str, payload: list, verb: str, error_cls: type
    ) -> HttpResponse:
        try:
            response = await self._client.request(
                endpoint,
                method="POST",
                headers={"Content-Type": "application/json"},
                body=json.dumps(payload),
            )
        except TransportError as e:
            raise error_cls(f"Failed to {verb} restaurant: {e.message}") from e

        if not response.ok:
            raise error_cls(
                f"Failed to {verb} restaurant: {response.status_text}, "
                f"response: {dump_payload(response.text())}",
                details={"status": response.status, "restaurant_id": self._id},
            )
        return response

    async def register(self) -> None:
        """
        Add this restaurant to the user's restaurant list.

        Raises:
            AlreadyRegisteredError: If it is already registered
            RegistrationError: If the registration call fails
        """
        if await self.check_is_registered():
            raise AlreadyRegisteredError(f"Restaurant {self._id} is already registered")

        # Any integer is accepted as the list position
        order_seq = 10000 * random.randrange(9999)
        await self._post_my_list(
            Endpoints.REGISTER_MY_RESTAURANT,
            [{"mainDiv": "N", "restaurantId": self._id, "orderSeq": order_seq}],
            "register",
            RegistrationError,
        )
        logger.info(f"Restaurant {self._id} registered")

    async def unregister(self) -> None:
        """
        Remove this restaurant from the user's restaurant list.

        Raises:
            NotRegisteredError: If it is not registered
            UnregistrationError: If the deletion call fails
        """
        if not await self.check_is_registered():
            raise NotRegisteredError(f"Restaurant {self._id} is not registered")

        await self._post_my_list(
            Endpoints.DELETE_MY_RESTAURANT,
            [{"hcId": "", "restaurantId": self._id}],
            "unregister",
            UnregistrationError,
        )
        logger.info(f"Restaurant {self._id} unregistered")

    # =========================================================================
    # MEALS
    # =========================================================================

    async def list_meal_times(self) -> list[MealTime]:
        """
        List the meal times served by this restaurant.

        Returns an empty list when the response carries no ``data``.
        """
        body = await self._get_json(
            Endpoints.LIST_MEAL_TIME, "list meal times", self._cafeteria_cookie()
        )
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            return []
        return [decode_meal_time(raw) for raw in data]

    async def list_meal(self, date: int, meal_time_id: str) -> list[WelstoryMeal]:
        """
        List meals for a date and meal time.

        Args:
            date: Date as a YYYYMMDD integer
            meal_time_id: Meal time id from list_meal_times()

        Raises:
            RequestError: On transport or parse failure
            DataFormatError: If ``data.mealList`` is missing or an entry is malformed
        """
        body = await self._get_json(
            Endpoints.list_meal(date, meal_time_id, self._id), "list meal"
        )
        data = body.get("data") if isinstance(body, dict) else None
        meal_list = data.get("mealList") if isinstance(data, dict) else None
        if not isinstance(meal_list, list):
            raise DataFormatError(
                f"Invalid meal list response: {dump_payload(body)}",
                details={"restaurant_id": self._id, "date": date},
            )

        meals = []
        for raw in meal_list:
            parsed = decode_meal(raw)
            meals.append(
                WelstoryMeal(
                    self._client,
                    self,
                    hall_no=parsed.hallNo,
                    date=date,
                    meal_time_id=meal_time_id,
                    name=parsed.menuName,
                    menu_course_name=parsed.courseTxt,
                    menu_course_type=parsed.menuCourseType,
                    set_name=parsed.setMenuName,
                    sub_menu_txt=parsed.subMenuTxt,
                    photo_url=f"{parsed.photoUrl}{parsed.photoCd}",
                )
            )
        return meals
