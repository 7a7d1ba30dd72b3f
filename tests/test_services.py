import httpx
import pytest

from models import Show
from services import NetworkError, RequestError


@pytest.mark.parametrize("query", ["", " ", "   ", "\t\n"])
def test_blank_query_makes_no_request(make_client, query):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    client = make_client(handler)
    assert client.search_shows(query) == []
    assert calls == []


def test_search_shows_parses_hits_in_order(make_client, friends_payload):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=friends_payload)

    hits = make_client(handler).search_shows("friends")

    assert len(seen) == 1
    assert seen[0].url.path == "/search/shows"
    assert seen[0].url.params["q"] == "friends"
    assert [h.show.name for h in hits] == ["Friends", "Friends from College", "Friends with Benefits"]
    assert hits[0].score == 0.91

    friends = hits[0].show
    assert friends.id == 431
    assert friends.genres == ("Comedy", "Romance")
    assert friends.rating.average == 8.5
    assert friends.schedule.days == ("Thursday",)
    assert friends.channel_name == "NBC"
    assert friends.externals.imdb == "tt0108778"
    assert friends.image.original == "https://static.tvmaze.com/original/431.jpg"
    assert hits[2].show.image is None
    assert hits[2].show.rating.average is None


def test_search_query_is_url_encoded(make_client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    make_client(handler).search_shows("law & order")
    assert seen[0].url.params["q"] == "law & order"
    assert b"law+%26+order" in seen[0].url.query or b"law%20%26%20order" in seen[0].url.query


def test_search_skips_items_without_show(make_client):
    payload = [{"score": 1.0}, {"score": 0.5, "show": {"name": "No id"}}, {"score": 0.4, "show": {"id": 7, "name": "Kept"}}]
    hits = make_client(lambda request: httpx.Response(200, json=payload)).search_shows("x")
    assert [h.show.name for h in hits] == ["Kept"]
    assert hits[0].show.schedule.days == ()
    assert hits[0].show.channel_name is None


def test_web_channel_used_when_no_network(make_client):
    payload = [{"score": 1.0, "show": {"id": 1, "name": "Web", "network": None, "webChannel": {"name": "Netflix"}}}]
    hits = make_client(lambda request: httpx.Response(200, json=payload)).search_shows("web")
    assert hits[0].show.channel_name == "Netflix"


@pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
def test_non_success_status_raises_request_error(make_client, status):
    client = make_client(lambda request: httpx.Response(status))
    with pytest.raises(RequestError) as excinfo:
        client.search_shows("friends")
    assert excinfo.value.status_code == status
    assert excinfo.value.reason == httpx.codes.get_reason_phrase(status)
    assert str(status) in str(excinfo.value)


def test_get_show_by_id(make_client, make_show_payload):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=make_show_payload(431, "Friends"))

    show = make_client(handler).get_show_by_id(431)
    assert isinstance(show, Show)
    assert show.name == "Friends"
    assert seen[0].url.path == "/shows/431"


def test_get_show_by_id_not_found(make_client):
    client = make_client(lambda request: httpx.Response(404))
    with pytest.raises(RequestError) as excinfo:
        client.get_show_by_id(999999)
    assert excinfo.value.status_code == 404
    assert excinfo.value.reason == "Not Found"


def test_transport_failure_raises_network_error(make_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as excinfo:
        make_client(handler).search_shows("friends")
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_malformed_body_raises_network_error(make_client):
    client = make_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(NetworkError):
        client.search_shows("friends")


@pytest.mark.parametrize("show", [
    {"id": "abc", "name": "Bad id"},
    {"id": 1, "name": "Bad schedule", "schedule": "Thursdays"},
    {"id": 1, "name": "Bad image", "image": ["https://img/m.jpg"]},
    {"id": 1, "name": "Bad rating", "rating": {"average": "great"}},
    {"id": 1, "name": "Bad network", "network": "NBC"},
])
def test_malformed_show_fields_raise_network_error(make_client, show):
    client = make_client(lambda request: httpx.Response(200, json=[{"score": 1.0, "show": show}]))
    with pytest.raises(NetworkError) as excinfo:
        client.search_shows("x")
    assert "Malformed response" in str(excinfo.value)
    assert excinfo.value.__cause__ is not None


def test_non_list_search_body_raises_network_error(make_client):
    client = make_client(lambda request: httpx.Response(200, json={"show": {"id": 1}}))
    with pytest.raises(NetworkError):
        client.search_shows("x")


def test_get_show_by_id_malformed_field(make_client, make_show_payload):
    payload = make_show_payload(431, "Friends", externals="tt0108778")
    client = make_client(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(NetworkError):
        client.get_show_by_id(431)
