import logging
import math
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from gpacalc.core.entries import EntryStore, Slot


logger = logging.getLogger(__name__)

DECIMAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True)
class AggregateResult:
    semester_results: Dict[Slot, Optional[float]] = field(default_factory=dict)
    cumulative_gpa: Optional[float] = None
    total_credits: float = 0.0
    total_quality_points: float = 0.0

    @classmethod
    def empty(cls, store: EntryStore) -> "AggregateResult":
        return cls(semester_results={slot: None for slot in store.slots()})

    def semester_gpa(self, level: int, semester: int) -> Optional[float]:
        return self.semester_results.get((level, semester))


def parse_number(text: str) -> Optional[float]:
    """
    Parse a raw field value as a finite decimal number.
    Only plain ASCII decimal notation is accepted.
    Returns None for blank, non-numeric, NaN and infinite input.
    """
    stripped = text.strip() if text else ""
    if not stripped or not DECIMAL_PATTERN.fullmatch(stripped):
        return None
    try:
        value = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def aggregate(store: EntryStore) -> AggregateResult:
    """
    Credit-weighted cumulative GPA over every slot of the store:
    CGPA = Σ(gpa * credits) / Σ(credits)

    A slot counts only when both its GPA and credits parse as numbers.
    Range is not checked.
    """
    semester_results: Dict[Slot, Optional[float]] = {}
    quality_points = 0.0
    total_credits = 0.0
    contributing = 0

    for slot in store.slots():
        entry = store.entries[slot]
        gpa = parse_number(entry.gpa_text)
        credits = parse_number(entry.credits_text)

        if gpa is None or credits is None:
            semester_results[slot] = None
            continue

        quality_points += gpa * credits
        total_credits += credits
        semester_results[slot] = gpa
        contributing += 1

    cumulative = quality_points / total_credits if total_credits > 0 else None
    if cumulative is not None and not math.isfinite(cumulative):
        # Sums of huge inputs can overflow.
        cumulative = None
    logger.debug("Aggregated %d contributing slots, %s credits", contributing, total_credits)

    return AggregateResult(
        semester_results=semester_results,
        cumulative_gpa=cumulative,
        total_credits=total_credits,
        total_quality_points=quality_points,
    )


def format_gpa(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}"


def format_credits(value: float) -> str:
    if not math.isfinite(value):
        return "N/A"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_points(value: float) -> str:
    if not math.isfinite(value):
        return "N/A"
    return f"{value:.2f}"


def level_label(level: int) -> str:
    return f"Level {level}"


def semester_label(semester: int) -> str:
    return f"Semester {semester}"
