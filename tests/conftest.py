import httpx
import pytest

from config import Config
from services import TVMazeClient

BASE_URL = "https://api.tvmaze.test"


def show_payload(show_id, name, **extra):
    payload = {
        "id": show_id,
        "url": f"https://www.tvmaze.com/shows/{show_id}",
        "name": name,
        "type": "Scripted",
        "language": "English",
        "genres": ["Comedy", "Romance"],
        "status": "Ended",
        "runtime": 30,
        "premiered": "1994-09-22",
        "ended": "2004-05-06",
        "officialSite": None,
        "schedule": {"time": "20:00", "days": ["Thursday"]},
        "rating": {"average": 8.5},
        "network": {"id": 1, "name": "NBC"},
        "webChannel": None,
        "externals": {"tvrage": 3616, "thetvdb": 79168, "imdb": "tt0108778"},
        "image": {
            "medium": f"https://static.tvmaze.com/medium/{show_id}.jpg",
            "original": f"https://static.tvmaze.com/original/{show_id}.jpg",
        },
        "summary": f"<p><b>{name}</b> follows six friends.</p>",
    }
    payload.update(extra)
    return payload


@pytest.fixture
def make_show_payload():
    return show_payload


@pytest.fixture
def friends_payload():
    return [
        {"score": 0.91, "show": show_payload(431, "Friends")},
        {"score": 0.72, "show": show_payload(60488, "Friends from College", rating={"average": 6.2})},
        {"score": 0.70, "show": show_payload(48437, "Friends with Benefits", image=None, rating={"average": None})},
    ]


@pytest.fixture
def make_client():
    clients = []

    def _make(handler):
        client = TVMazeClient(BASE_URL, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def test_config():
    return Config(API_BASE_URL=BASE_URL, FEATURED_QUERIES=())
