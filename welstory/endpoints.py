"""
API endpoint definitions for the Welstory Plus service.

Paths are relative and resolved against the client's base URL. Dynamic
segments are interpolated as given; only the free-text search query is
percent-encoded.
"""

from urllib.parse import quote


class Endpoints:
    """Collection of all API endpoints used by the client."""

    LOGIN = "/login"
    SESSION_REFRESH = "/session"

    LIST_MY_RESTAURANT = "/api/mypage/rest-my-list"
    REGISTER_MY_RESTAURANT = "/api/mypage/rest-regi"
    DELETE_MY_RESTAURANT = "/api/mypage/rest-delete"

    LIST_MEAL_TIME = "/api/menu/getMealTimeList"

    @staticmethod
    def search_restaurant(search_query: str) -> str:
        """Search restaurants by name."""
        # safe set matches encodeURIComponent
        encoded = quote(search_query, safe="-_.!~*'()")
        return f"/api/mypage/rest-list?restaurantName={encoded}"

    @staticmethod
    def list_meal(date: int, meal_time_id: str, restaurant_id: str) -> str:
        """
        Meals served at a restaurant for one date and meal time.

        Args:
            date: Date as a YYYYMMDD integer
            meal_time_id: Meal time code (breakfast, lunch, ...)
            restaurant_id: Restaurant code
        """
        return (
            f"/api/meal?menuDt={date}"
            f"&menuMealType={meal_time_id}"
            f"&restaurantCode={restaurant_id}"
        )

    @staticmethod
    def _meal_query(
        date: int,
        meal_time_id: str,
        hall_no: str,
        menu_course_type: str,
        restaurant_id: str,
    ) -> str:
        return (
            f"menuDt={date}"
            f"&hallNo={hall_no}"
            f"&menuCourseType={menu_course_type}"
            f"&menuMealType={meal_time_id}"
            f"&restaurantCode={restaurant_id}"
        )

    @staticmethod
    def list_meal_detail(
        date: int,
        meal_time_id: str,
        hall_no: str,
        menu_course_type: str,
        restaurant_id: str,
    ) -> str:
        """Detailed course information for a single meal."""
        query = Endpoints._meal_query(date, meal_time_id, hall_no, menu_course_type, restaurant_id)
        return f"/api/meal/detail?{query}"

    @staticmethod
    def list_meal_nutrient(
        date: int,
        meal_time_id: str,
        hall_no: str,
        menu_course_type: str,
        restaurant_id: str,
    ) -> str:
        """Per-item nutritional information for a single meal."""
        query = Endpoints._meal_query(date, meal_time_id, hall_no, menu_course_type, restaurant_id)
        return f"/api/meal/detail/nutrient?{query}"
