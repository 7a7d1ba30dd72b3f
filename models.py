# models.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

@dataclass(frozen=True)
class Image:
    medium: str
    original: str

@dataclass(frozen=True)
class Rating:
    average: Optional[float] = None

@dataclass(frozen=True)
class Schedule:
    time: Optional[str] = None
    days: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Channel:
    name: str

@dataclass(frozen=True)
class Externals:
    imdb: Optional[str] = None
    thetvdb: Optional[int] = None
    tvrage: Optional[int] = None

@dataclass(frozen=True)
class Show:
    """A single show record as returned by TVMaze. Only id and name are guaranteed."""
    id: int
    name: str
    url: Optional[str] = None
    type: Optional[str] = None
    language: Optional[str] = None
    genres: Tuple[str, ...] = ()
    status: Optional[str] = None
    runtime: Optional[int] = None
    premiered: Optional[str] = None
    ended: Optional[str] = None
    official_site: Optional[str] = None
    schedule: Schedule = Schedule()
    rating: Rating = Rating()
    network: Optional[Channel] = None
    web_channel: Optional[Channel] = None
    externals: Externals = Externals()
    image: Optional[Image] = None
    summary: Optional[str] = None

    @property
    def channel_name(self) -> Optional[str]:
        if self.network:
            return self.network.name
        if self.web_channel:
            return self.web_channel.name
        return None

@dataclass(frozen=True)
class SearchHit:
    """One entry of a search response: the show and how well it matched."""
    score: float
    show: Show

class Phase(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    RESULTS = "results"
    ERROR = "error"

@dataclass(frozen=True)
class AppState:
    """A single object to hold the entire application state."""
    phase: Phase = Phase.IDLE
    query: str = ""
    results: Tuple[Show, ...] = ()
    selected: Optional[Show] = None
    detail_open: bool = False
    error: Optional[str] = None
    generation: int = 0
    has_searched: bool = False
