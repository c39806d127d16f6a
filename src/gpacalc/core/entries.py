from dataclasses import dataclass, replace
from typing import Dict, Iterator, Sequence, Tuple


LEVELS: Tuple[int, ...] = (100, 200, 300, 400)
SEMESTERS: Tuple[int, ...] = (1, 2)

FIELDS = ("gpa", "credits")

Slot = Tuple[int, int]


@dataclass(frozen=True)
class Entry:
    gpa_text: str = ""
    credits_text: str = ""


@dataclass(frozen=True)
class EntryStore:
    """
    Raw text per (level, semester) slot.
    The slot set is fixed when the store is created and never changes.
    """

    levels: Tuple[int, ...]
    semesters: Tuple[int, ...]
    entries: Dict[Slot, Entry]

    @classmethod
    def initial(
        cls,
        levels: Sequence[int] = LEVELS,
        semesters: Sequence[int] = SEMESTERS,
    ) -> "EntryStore":
        levels = tuple(sorted(levels))
        semesters = tuple(semesters)
        if not levels or not semesters:
            raise ValueError("At least one level and one semester are required")
        entries = {(level, sem): Entry() for level in levels for sem in semesters}
        return cls(levels=levels, semesters=semesters, entries=entries)

    def slots(self) -> Iterator[Slot]:
        for level in self.levels:
            for sem in self.semesters:
                yield level, sem

    def get(self, level: int, semester: int) -> Entry:
        try:
            return self.entries[(level, semester)]
        except KeyError as exc:
            raise KeyError(f"Unknown slot: level {level}, semester {semester}") from exc


def set_field(store: EntryStore, level: int, semester: int, field: str, value: str) -> EntryStore:
    """Return a copy of `store` with one raw field of one slot overwritten."""
    if field not in FIELDS:
        raise ValueError(f"Unsupported field: {field}. Use 'gpa' or 'credits'.")

    current = store.get(level, semester)
    if field == "gpa":
        updated = replace(current, gpa_text=value)
    else:
        updated = replace(current, credits_text=value)

    entries = dict(store.entries)
    entries[(level, semester)] = updated
    return replace(store, entries=entries)
