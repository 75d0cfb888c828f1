"""
Stats Store - key-value persistence of career stats and the UI theme.

Failures never propagate: a failed or malformed load falls back to defaults,
a failed save is logged and dropped.
"""
import json
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from handcricket.engine.career import CareerStats
from handcricket.models.setting import Setting
from handcricket.validators.stats_validator import StatsValidator

logger = logging.getLogger(__name__)

STATS_KEY = "stats"
THEME_KEY = "theme"
DEFAULT_THEME = "light"


class StatsStore:

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _read(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            row = session.get(Setting, key)
            return row.value if row else None

    def _write(self, key: str, value: str) -> None:
        with self.session_factory() as session:
            row = session.get(Setting, key)
            if row is None:
                session.add(Setting(key=key, value=value))
            else:
                row.value = value
            session.commit()

    def load_stats(self) -> CareerStats:
        try:
            raw = self._read(STATS_KEY)
        except SQLAlchemyError as e:
            logger.warning("Could not load stats, using defaults: %s", e)
            return CareerStats()

        if raw is None:
            return CareerStats()
        try:
            return CareerStats.from_dict(StatsValidator.parse_stats(raw))
        except ValueError as e:
            logger.warning("Stored stats are malformed, using defaults: %s", e)
            return CareerStats()

    def save_stats(self, stats: CareerStats) -> bool:
        try:
            self._write(STATS_KEY, json.dumps(stats.to_dict()))
        except SQLAlchemyError as e:
            logger.warning("Could not save stats: %s", e)
            return False
        return True

    def load_theme(self) -> str:
        try:
            raw = self._read(THEME_KEY)
        except SQLAlchemyError as e:
            logger.warning("Could not load theme, using default: %s", e)
            return DEFAULT_THEME

        if raw is None:
            return DEFAULT_THEME
        try:
            return StatsValidator.parse_theme(raw)
        except ValueError as e:
            logger.warning("Stored theme is malformed, using default: %s", e)
            return DEFAULT_THEME

    def save_theme(self, theme: str) -> bool:
        theme = StatsValidator.parse_theme(theme)
        try:
            self._write(THEME_KEY, theme)
        except SQLAlchemyError as e:
            logger.warning("Could not save theme: %s", e)
            return False
        return True
