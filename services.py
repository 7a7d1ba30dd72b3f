# services.py
import logging
from typing import Any, List, Optional

import httpx

from models import Channel, Externals, Image, Rating, Schedule, SearchHit, Show

logger = logging.getLogger(__name__)


class FlixFrameError(Exception):
    """Base exception for failures talking to the metadata API."""


class RequestError(FlixFrameError):
    """Raised when the API answers with a non-2xx status."""
    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"API request failed: {status_code} {reason}")


class NetworkError(FlixFrameError):
    """Raised when the request never produced a usable response."""


class TVMazeClient:
    """A service to handle interactions with the TVMaze API."""
    def __init__(self, base_url: str, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(base_url=self.base_url, transport=transport)

    def search_shows(self, query: str) -> List[SearchHit]:
        """Searches shows by name. A blank query returns nothing without a request."""
        if not query.strip():
            return []
        items = self._fetch("/search/shows", params={"q": query})
        if not isinstance(items, list):
            raise NetworkError("Malformed response from /search/shows")
        hits = []
        for item in items:
            hit = self._parse(self._parse_hit, item, "/search/shows")
            if hit:
                hits.append(hit)
        return hits

    def get_show_by_id(self, show_id: int) -> Show:
        data = self._fetch(f"/shows/{show_id}")
        show = self._parse(self._parse_show, data, f"/shows/{show_id}")
        if show is None:
            raise NetworkError(f"Malformed response for show {show_id}")
        return show

    def close(self):
        self._http.close()

    def _fetch(self, endpoint: str, params: Optional[dict] = None) -> Any:
        logger.debug("GET %s%s params=%s", self.base_url, endpoint, params)
        try:
            response = self._http.get(endpoint, params=params)
        except httpx.TransportError as e:
            logger.warning("Request to %s failed: %s", endpoint, e)
            raise NetworkError(f"Network error while contacting {self.base_url}: {e}") from e

        if not response.is_success:
            logger.warning("Request to %s returned %s", endpoint, response.status_code)
            raise RequestError(response.status_code, response.reason_phrase)
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Malformed response from {endpoint}") from e

    def _parse(self, parser, data: Any, endpoint: str) -> Any:
        """Runs a parser, reporting any unexpected field type as a malformed response."""
        try:
            return parser(data)
        except (TypeError, ValueError, AttributeError, KeyError) as e:
            logger.warning("Malformed payload from %s: %s", endpoint, e)
            raise NetworkError(f"Malformed response from {endpoint}") from e

    def _parse_hit(self, item: dict) -> Optional[SearchHit]:
        """Parses a single raw search item into our SearchHit data model."""
        if not isinstance(item, dict):
            return None
        show = self._parse_show(item.get("show"))
        if show is None:
            return None
        return SearchHit(score=float(item.get("score") or 0.0), show=show)

    def _parse_show(self, data: Any) -> Optional[Show]:
        """Parses a raw show object, or returns None when it has no id."""
        if not isinstance(data, dict) or data.get("id") is None:
            return None

        image = data.get("image")
        schedule = data.get("schedule") or {}
        rating = data.get("rating") or {}
        externals = data.get("externals") or {}
        network = data.get("network")
        web_channel = data.get("webChannel")
        average = rating.get("average")

        return Show(
            id=int(data["id"]),
            name=data.get("name") or "Untitled",
            url=data.get("url"),
            type=data.get("type"),
            language=data.get("language"),
            genres=tuple(data.get("genres") or ()),
            status=data.get("status"),
            runtime=data.get("runtime"),
            premiered=data.get("premiered"),
            ended=data.get("ended"),
            official_site=data.get("officialSite"),
            schedule=Schedule(time=schedule.get("time") or None, days=tuple(schedule.get("days") or ())),
            rating=Rating(average=float(average) if average is not None else None),
            network=Channel(network["name"]) if network and network.get("name") else None,
            web_channel=Channel(web_channel["name"]) if web_channel and web_channel.get("name") else None,
            externals=Externals(
                imdb=externals.get("imdb"),
                thetvdb=externals.get("thetvdb"),
                tvrage=externals.get("tvrage"),
            ),
            image=Image(medium=image.get("medium", ""), original=image.get("original", "")) if image else None,
            summary=data.get("summary"),
        )
