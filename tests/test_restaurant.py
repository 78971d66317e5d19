import pytest

from welstory import WelstoryMeal, WelstoryRestaurant
from welstory.core.exceptions import (
    AlreadyRegisteredError,
    DataFormatError,
    NotRegisteredError,
    RegistrationError,
    RequestError,
    StateConflictError,
    UnregistrationError,
)
from welstory.schemas import MealTime
from welstory.services.transport import MockTransport

MY_LIST = "/api/mypage/rest-my-list"
REGI = "/api/mypage/rest-regi"
DELETE = "/api/mypage/rest-delete"
MEAL_TIMES = "/api/menu/getMealTimeList"
MEALS = "/api/meal"


def _meal_entry(**overrides: object) -> dict:
    entry = {
        "hallNo": "E5",
        "menuName": "Bibimbap",
        "courseTxt": "Korean",
        "menuCourseType": "AA",
        "photoUrl": "https://img.test/menu/",
        "photoCd": "bibimbap.jpg",
        "setMenuName": "Set A",
        "subMenuTxt": "Kimchi, Soup",
    }
    entry.update(overrides)
    return entry


# =============================================================================
# REGISTRATION STATE
# =============================================================================

@pytest.mark.asyncio
async def test_check_is_registered_true_when_id_present(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_response("GET", MY_LIST, json_body={"data": [
        {"restaurantId": "OTHER"},
        {"restaurantId": restaurant.id, "restaurantName": "R5 B1F"},
    ]})
    assert await restaurant.check_is_registered() is True


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {"data": []},
    {"data": [{"restaurantId": "OTHER"}]},
    {},
    {"data": None},
])
async def test_check_is_registered_false(
    restaurant: WelstoryRestaurant, transport: MockTransport, body: dict
) -> None:
    transport.add_response("GET", MY_LIST, json_body=body)
    assert await restaurant.check_is_registered() is False


@pytest.mark.asyncio
async def test_check_is_registered_request_failures(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_error("GET", MY_LIST)
    with pytest.raises(RequestError, match="check if restaurant is registered"):
        await restaurant.check_is_registered()


@pytest.mark.asyncio
async def test_check_is_registered_http_failure(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_response("GET", MY_LIST, status=500, json_body={"data": []})
    with pytest.raises(RequestError, match="Internal Server Error"):
        await restaurant.check_is_registered()


@pytest.mark.asyncio
async def test_register_posts_single_entry(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_response("GET", MY_LIST, json_body={"data": []})
    transport.add_response("POST", REGI, json_body={"result": "ok"})

    await restaurant.register()

    sent = transport.requests_to(REGI, "POST")[0]
    assert sent.header("Content-Type") == "application/json"
    payload = sent.json()
    assert len(payload) == 1
    assert payload[0]["mainDiv"] == "N"
    assert payload[0]["restaurantId"] == restaurant.id
    assert isinstance(payload[0]["orderSeq"], int)


@pytest.mark.asyncio
async def test_register_when_registered_issues_no_post(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_response("GET", MY_LIST, json_body={"data": [{"restaurantId": restaurant.id}]})

    with pytest.raises(AlreadyRegisteredError) as exc_info:
        await restaurant.register()

    assert isinstance(exc_info.value, StateConflictError)
    assert transport.requests_to(REGI) == []


@pytest.mark.asyncio
async def test_register_http_failure(restaurant: WelstoryRestaurant, transport: MockTransport) -> None:
    transport.add_response("GET", MY_LIST, json_body={"data": []})
    transport.add_response("POST", REGI, status=400, text="limit reached")

    with pytest.raises(RegistrationError, match="limit reached"):
        await restaurant.register()


@pytest.mark.asyncio
async def test_unregister_posts_deletion(restaurant: WelstoryRestaurant, transport: MockTransport) -> None:
    transport.add_response("GET", MY_LIST, json_body={"data": [{"restaurantId": restaurant.id}]})
    transport.add_response("POST", DELETE, json_body={})

    await restaurant.unregister()

    assert transport.requests_to(DELETE, "POST")[0].json() == [
        {"hcId": "", "restaurantId": restaurant.id}
    ]


@pytest.mark.asyncio
async def test_unregister_when_not_registered(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_response("GET", MY_LIST, json_body={"data": []})

    with pytest.raises(NotRegisteredError):
        await restaurant.unregister()
    assert transport.requests_to(DELETE) == []


@pytest.mark.asyncio
async def test_unregister_http_failure(restaurant: WelstoryRestaurant, transport: MockTransport) -> None:
    transport.add_response("GET", MY_LIST, json_body={"data": [{"restaurantId": restaurant.id}]})
    transport.add_response("POST", DELETE, status=500, text="")
    with pytest.raises(UnregistrationError, match="Internal Server Error"):
        await restaurant.unregister()


@pytest.mark.asyncio
async def test_unregister_transport_failure(restaurant: WelstoryRestaurant, transport: MockTransport) -> None:
    transport.add_response("GET", MY_LIST, json_body={"data": [{"restaurantId": restaurant.id}]})
    transport.add_error("POST", DELETE)
    with pytest.raises(UnregistrationError, match="connection refused"):
        await restaurant.unregister()


# =============================================================================
# MEAL TIMES
# =============================================================================

@pytest.mark.asyncio
async def test_list_meal_times_maps_entries_and_sends_cookie(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_response("GET", MEAL_TIMES, json_body={"data": [
        {"code": "1", "codeNm": "Breakfast"},
        {"code": "2", "codeNm": "Lunch"},
    ]})

    times = await restaurant.list_meal_times()

    assert times == [MealTime("1", "Breakfast"), MealTime("2", "Lunch")]
    assert transport.requests[0].header("Cookie") == f"cafeteriaActiveId={restaurant.id}"


@pytest.mark.asyncio
async def test_list_meal_times_empty_without_data(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_response("GET", MEAL_TIMES, json_body={"result": "ok"})
    assert await restaurant.list_meal_times() == []


@pytest.mark.asyncio
async def test_list_meal_times_request_failure(
    restaurant: WelstoryRestaurant, transport: MockTransport
) -> None:
    transport.add_response("GET", MEAL_TIMES, text="not json")
    with pytest.raises(RequestError, match="list meal times"):
        await restaurant.list_meal_times()


# =============================================================================
# MEALS
# =============================================================================

@pytest.mark.asyncio
async def test_list_meal_builds_meals(restaurant: WelstoryRestaurant, transport: MockTransport) -> None:
    transport.add_response("GET", MEALS, json_body={"data": {"mealList": [
        _meal_entry(),
        _meal_entry(menuName="Pasta", setMenuName=None, subMenuTxt=None),
        {k: v for k, v in _meal_entry(menuName="Curry").items() if k not in ("setMenuName", "subMenuTxt")},
    ]}})

    meals = await restaurant.list_meal(20250814, "2")

    assert transport.requests[0].query == {
        "menuDt": ["20250814"],
        "menuMealType": ["2"],
        "restaurantCode": [restaurant.id],
    }
    assert [m.name for m in meals] == ["Bibimbap", "Pasta", "Curry"]
    first = meals[0]
    assert isinstance(first, WelstoryMeal)
    assert first.restaurant is restaurant
    assert first.client is restaurant.client
    assert first.hall_no == "E5"
    assert first.date == 20250814
    assert first.meal_time_id == "2"
    assert first.menu_course_name == "Korean"
    assert first.menu_course_type == "AA"
    assert first.set_name == "Set A"
    assert first.sub_menu_txt == "Kimchi, Soup"
    assert first.photo_url == "https://img.test/menu/bibimbap.jpg"
    assert meals[1].set_name is None and meals[1].sub_menu_txt is None
    assert meals[2].set_name is None and meals[2].sub_menu_txt is None


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"data": {}}, {"data": {"mealList": None}}])
async def test_list_meal_requires_meal_list(
    restaurant: WelstoryRestaurant, transport: MockTransport, body: dict
) -> None:
    transport.add_response("GET", MEALS, json_body=body)
    with pytest.raises(DataFormatError):
        await restaurant.list_meal(20250814, "2")


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["hallNo", "menuName", "courseTxt", "menuCourseType", "photoUrl", "photoCd"])
async def test_list_meal_rejects_missing_required_field(
    restaurant: WelstoryRestaurant, transport: MockTransport, field: str
) -> None:
    bad = _meal_entry()
    del bad[field]
    transport.add_response("GET", MEALS, json_body={"data": {"mealList": [_meal_entry(), bad]}})

    with pytest.raises(DataFormatError):
        await restaurant.list_meal(20250814, "2")


@pytest.mark.asyncio
async def test_list_meal_transport_failure(restaurant: WelstoryRestaurant, transport: MockTransport) -> None:
    transport.add_error("GET", MEALS)
    with pytest.raises(RequestError, match="list meal"):
        await restaurant.list_meal(20250814, "2")
