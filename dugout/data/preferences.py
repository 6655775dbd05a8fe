"""Persisted user preferences (player filter, season, time period).

Architecture:
    ``KeyValueStorage`` is the get/set/remove capability the host provides
    (browser storage, a file, a settings service). ``Preferences`` layers
    typed accessors with documented defaults on top of it.

Design Decisions:
    - Reads never raise: storage errors and unknown stored values fall back
      to the default and are logged at debug level
    - Writes and removals are best-effort for the same reason
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from .core.enums import PlayerFilter, SeasonChoice, StatType, TimePeriod

logger = logging.getLogger(__name__)

PLAYER_FILTER_KEY = "dugout:playerFilter"
SEASON_FILTER_KEY = "dugout:seasonFilter"
TIME_PERIOD_FILTER_KEY = "dugout:timePeriodFilter"

DEFAULT_PLAYER_FILTER = PlayerFilter.ALL_BATTERS
DEFAULT_SEASON = SeasonChoice.CURRENT
DEFAULT_TIME_PERIOD = TimePeriod.FULL


class KeyValueStorage(Protocol):
    """String-keyed storage capability."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    """Process-local storage, mostly for tests and scripts."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileStorage:
    """Storage backed by a single JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _dump(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(values, indent=2, sort_keys=True), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._dump(values)

    def remove(self, key: str) -> None:
        values = self._load()
        if values.pop(key, None) is not None:
            self._dump(values)


def derive_stat_type(season: SeasonChoice, period: TimePeriod) -> StatType:
    """Upstream stat window for a season/period choice.

    The prior season only has full-season stats.
    """
    if season == SeasonChoice.LAST:
        return StatType.SEASON
    if period == TimePeriod.LAST_MONTH:
        return StatType.LAST_MONTH
    if period == TimePeriod.LAST_WEEK:
        return StatType.LAST_WEEK
    return StatType.SEASON


class Preferences:
    """Typed preference accessors over a KeyValueStorage."""

    def __init__(self, storage: KeyValueStorage | None = None) -> None:
        self._storage = storage if storage is not None else InMemoryStorage()

    def _read(self, key: str) -> str | None:
        try:
            return self._storage.get(key)
        except Exception as e:
            logger.debug(f"Preference read failed for {key}: {e}")
            return None

    def _write(self, key: str, value: str) -> None:
        try:
            self._storage.set(key, value)
        except Exception as e:
            logger.debug(f"Preference write failed for {key}: {e}")

    def _remove(self, key: str) -> None:
        try:
            self._storage.remove(key)
        except Exception as e:
            logger.debug(f"Preference removal failed for {key}: {e}")

    # Player filter
    def get_player_filter(self) -> PlayerFilter:
        return PlayerFilter.from_str(self._read(PLAYER_FILTER_KEY)) or DEFAULT_PLAYER_FILTER

    def save_player_filter(self, value: PlayerFilter) -> None:
        self._write(PLAYER_FILTER_KEY, PlayerFilter(value).value)

    def clear_player_filter(self) -> None:
        self._remove(PLAYER_FILTER_KEY)

    # Season
    def get_season(self) -> SeasonChoice:
        return SeasonChoice.from_str(self._read(SEASON_FILTER_KEY)) or DEFAULT_SEASON

    def save_season(self, value: SeasonChoice) -> None:
        self._write(SEASON_FILTER_KEY, SeasonChoice(value).value)

    def clear_season(self) -> None:
        self._remove(SEASON_FILTER_KEY)

    # Time period
    def get_time_period(self) -> TimePeriod:
        return TimePeriod.from_str(self._read(TIME_PERIOD_FILTER_KEY)) or DEFAULT_TIME_PERIOD

    def save_time_period(self, value: TimePeriod) -> None:
        self._write(TIME_PERIOD_FILTER_KEY, TimePeriod(value).value)

    def clear_time_period(self) -> None:
        self._remove(TIME_PERIOD_FILTER_KEY)

    def stat_type(self) -> StatType:
        """Stat window implied by the stored season and time period."""
        return derive_stat_type(self.get_season(), self.get_time_period())
