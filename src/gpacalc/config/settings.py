from dataclasses import dataclass
import os
from typing import Mapping, Optional

from dotenv import load_dotenv


load_dotenv()


class SettingsError(ValueError):
    pass


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _to_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise SettingsError(f"{name} must be an integer, got {value!r}") from exc


def _to_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise SettingsError(f"{name} must be a number, got {value!r}") from exc


@dataclass(frozen=True)
class Settings:
    web_mode: bool = False
    port: int = 8550
    log_level: str = "INFO"
    gpa_max: float = 12.0
    levels: tuple[int, ...] = (100, 200, 300, 400)
    semesters_per_level: int = 2

    @property
    def semesters(self) -> tuple[int, ...]:
        return tuple(range(1, self.semesters_per_level + 1))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        levels = tuple(
            _to_int("GPACALC_LEVELS", item)
            for item in _split_csv(env.get("GPACALC_LEVELS", "100,200,300,400"))
        )
        if not levels:
            raise SettingsError("GPACALC_LEVELS must list at least one level")
        if len(set(levels)) != len(levels):
            raise SettingsError("GPACALC_LEVELS must not repeat a level")

        semesters_per_level = _to_int(
            "GPACALC_SEMESTERS_PER_LEVEL", env.get("GPACALC_SEMESTERS_PER_LEVEL", "2")
        )
        if semesters_per_level < 1:
            raise SettingsError("GPACALC_SEMESTERS_PER_LEVEL must be at least 1")

        log_level = env.get("GPACALC_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise SettingsError(f"GPACALC_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

        return cls(
            web_mode=env.get("GPACALC_WEB", "0") == "1",
            port=_to_int("PORT", env.get("PORT", "8550")),
            log_level=log_level,
            gpa_max=_to_float("GPACALC_GPA_MAX", env.get("GPACALC_GPA_MAX", "12")),
            levels=tuple(sorted(levels)),
            semesters_per_level=semesters_per_level,
        )


settings = Settings.from_env()
