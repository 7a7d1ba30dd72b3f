# state.py
"""Actions and the reducer that owns every AppState transition.

Idle -> Searching -> Results | Error; Results -> DetailOpen -> Results.
A new SearchStarted is accepted from any phase and bumps the generation, so
responses belonging to an older search are dropped.
"""
from dataclasses import dataclass, replace
from typing import Sequence, Union

from models import AppState, Phase, Show

@dataclass(frozen=True)
class SearchStarted:
    query: str
    featured: bool = False

@dataclass(frozen=True)
class SearchSucceeded:
    generation: int
    shows: Sequence[Show]

@dataclass(frozen=True)
class SearchFailed:
    generation: int
    message: str

@dataclass(frozen=True)
class SearchCleared:
    pass

@dataclass(frozen=True)
class ShowSelected:
    show: Show

@dataclass(frozen=True)
class DetailClosed:
    pass

Action = Union[SearchStarted, SearchSucceeded, SearchFailed, SearchCleared, ShowSelected, DetailClosed]


def update(state: AppState, action: Action) -> AppState:
    """Returns the state that follows `action`. The input state is never mutated."""
    if isinstance(action, SearchStarted):
        return replace(
            state,
            phase=Phase.SEARCHING,
            query=action.query,
            error=None,
            selected=None,
            detail_open=False,
            generation=state.generation + 1,
            has_searched=state.has_searched or not action.featured,
        )

    if isinstance(action, (SearchSucceeded, SearchFailed)) and action.generation != state.generation:
        return state

    if isinstance(action, SearchSucceeded):
        return replace(state, phase=Phase.RESULTS, results=tuple(action.shows), error=None)

    if isinstance(action, SearchFailed):
        return replace(state, phase=Phase.ERROR, results=(), error=action.message)

    if isinstance(action, SearchCleared):
        return AppState(generation=state.generation + 1)

    if isinstance(action, ShowSelected):
        return replace(state, selected=action.show, detail_open=True)

    if isinstance(action, DetailClosed):
        return replace(state, selected=None, detail_open=False)

    raise TypeError(f"Unknown action: {action!r}")
