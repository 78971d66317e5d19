from welstory.endpoints import Endpoints


def test_static_paths() -> None:
    assert Endpoints.LOGIN == "/login"
    assert Endpoints.SESSION_REFRESH == "/session"
    assert Endpoints.LIST_MY_RESTAURANT == "/api/mypage/rest-my-list"
    assert Endpoints.REGISTER_MY_RESTAURANT == "/api/mypage/rest-regi"
    assert Endpoints.DELETE_MY_RESTAURANT == "/api/mypage/rest-delete"
    assert Endpoints.LIST_MEAL_TIME == "/api/menu/getMealTimeList"


def test_search_query_is_percent_encoded() -> None:
    assert (
        Endpoints.search_restaurant("R5 B1F")
        == "/api/mypage/rest-list?restaurantName=R5%20B1F"
    )
    assert Endpoints.search_restaurant("a&b=c/d") == (
        "/api/mypage/rest-list?restaurantName=a%26b%3Dc%2Fd"
    )


def test_search_query_encodes_utf8() -> None:
    assert Endpoints.search_restaurant("하모니").endswith(
        "restaurantName=%ED%95%98%EB%AA%A8%EB%8B%88"
    )


def test_list_meal() -> None:
    assert Endpoints.list_meal(20250814, "2", "REST000595") == (
        "/api/meal?menuDt=20250814&menuMealType=2&restaurantCode=REST000595"
    )


def test_meal_detail_and_nutrient_share_query() -> None:
    args = (20250814, "2", "H1", "AA", "REST000595")
    query = "menuDt=20250814&hallNo=H1&menuCourseType=AA&menuMealType=2&restaurantCode=REST000595"
    assert Endpoints.list_meal_detail(*args) == f"/api/meal/detail?{query}"
    assert Endpoints.list_meal_nutrient(*args) == f"/api/meal/detail/nutrient?{query}"
