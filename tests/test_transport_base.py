import pytest

from welstory.core.exceptions import ParseError
from welstory.services.transport.base import HttpResponse, ResponseHeaders


class TestResponseHeaders:
    def test_lookup_is_case_insensitive(self) -> None:
        headers = ResponseHeaders({"Authorization": "Bearer abc", "X-Thing": "1"})
        assert headers.get("authorization") == "Bearer abc"
        assert headers.get("AUTHORIZATION") == "Bearer abc"
        assert "x-thing" in headers
        assert headers.get("missing") is None

    def test_accepts_pairs_and_joins_repeats(self) -> None:
        headers = ResponseHeaders([("Set-Cookie", "a=1"), ("set-cookie", "b=2")])
        assert headers.get("Set-Cookie") == "a=1, b=2"
        assert len(headers) == 1


class TestHttpResponse:
    @pytest.mark.parametrize(
        "status,ok",
        [(199, False), (200, True), (204, True), (299, True), (300, False), (404, False)],
    )
    def test_ok_range(self, status: int, ok: bool) -> None:
        assert HttpResponse(status=status).ok is ok

    def test_json_and_text(self) -> None:
        response = HttpResponse(status=200, content='{"data": "안녕"}'.encode("utf-8"))
        assert response.text() == '{"data": "안녕"}'
        assert response.json() == {"data": "안녕"}

    def test_invalid_json_raises_parse_error(self) -> None:
        response = HttpResponse(status=200, content=b"<html>oops</html>")
        with pytest.raises(ParseError) as exc_info:
            response.json()
        assert exc_info.value.details["status"] == 200
        # text stays readable
        assert response.text() == "<html>oops</html>"

    def test_empty_body_is_not_json(self) -> None:
        with pytest.raises(ParseError):
            HttpResponse(status=200).json()

    def test_charset_from_content_type(self) -> None:
        response = HttpResponse(
            status=200,
            headers=ResponseHeaders({"Content-Type": "text/plain; charset=euc-kr"}),
            content="한글".encode("euc-kr"),
        )
        assert response.text() == "한글"

    def test_unknown_charset_falls_back_to_utf8(self) -> None:
        response = HttpResponse(
            status=200,
            headers=ResponseHeaders({"Content-Type": "text/plain; charset=nope"}),
            content=b"plain",
        )
        assert response.text() == "plain"

    def test_to_dict(self) -> None:
        response = HttpResponse(
            status=404,
            status_text="Not Found",
            headers=ResponseHeaders({"X-Trace": "abc"}),
            url="https://welplus.test/x",
        )
        assert response.to_dict() == {
            "status": 404,
            "status_text": "Not Found",
            "ok": False,
            "headers": {"x-trace": "abc"},
            "url": "https://welplus.test/x",
        }
