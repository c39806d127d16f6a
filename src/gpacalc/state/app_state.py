from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from gpacalc.config.settings import Settings
from gpacalc.core.entries import EntryStore, set_field
from gpacalc.core.gpa import AggregateResult, aggregate


def _no_open_semesters() -> Mapping[int, FrozenSet[int]]:
    return MappingProxyType({})


@dataclass(frozen=True)
class AppState:
    entries: EntryStore
    results: AggregateResult
    open_levels: FrozenSet[int] = frozenset()
    open_semesters: Mapping[int, FrozenSet[int]] = field(default_factory=_no_open_semesters)

    @classmethod
    def initial(cls, settings: Optional[Settings] = None) -> "AppState":
        settings = settings or Settings()
        entries = EntryStore.initial(settings.levels, settings.semesters)
        return cls(entries=entries, results=AggregateResult.empty(entries))


def update_field(state: AppState, level: int, semester: int, field_name: str, value: str) -> AppState:
    return replace(state, entries=set_field(state.entries, level, semester, field_name, value))


def calculate(state: AppState) -> AppState:
    return replace(state, results=aggregate(state.entries))


def toggle_level(state: AppState, level: int) -> AppState:
    if level not in state.entries.levels:
        raise KeyError(f"Unknown level: {level}")

    open_semesters = dict(state.open_semesters)
    if level in state.open_levels:
        # Collapsing a level also collapses its semesters.
        open_levels = state.open_levels - {level}
        open_semesters.pop(level, None)
    else:
        open_levels = state.open_levels | {level}

    return replace(
        state,
        open_levels=frozenset(open_levels),
        open_semesters=MappingProxyType(open_semesters),
    )


def toggle_semester(state: AppState, level: int, semester: int) -> AppState:
    state.entries.get(level, semester)  # KeyError for an unknown slot

    current = state.open_semesters.get(level, frozenset())
    if semester in current:
        updated = current - {semester}
    else:
        updated = current | {semester}

    open_semesters = dict(state.open_semesters)
    open_semesters[level] = frozenset(updated)
    return replace(state, open_semesters=MappingProxyType(open_semesters))


def is_level_open(state: AppState, level: int) -> bool:
    return level in state.open_levels


def is_semester_open(state: AppState, level: int, semester: int) -> bool:
    return semester in state.open_semesters.get(level, frozenset())
