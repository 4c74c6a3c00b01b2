"""
Availability adapter backed by a JSON or YAML bookability file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml
from pendulum import DateTime

from ..domain.dates import day_key, in_offset
from ..domain.models import BookabilityMap, DayStatus, bookability_from_dict

logger = logging.getLogger(__name__)


class FileAvailabilityProvider:
    """
    Serves day bookability precomputed by the availability system.

    The file maps ISO days (booker timezone) to their status:

        {"2024-01-02": {"isBookable": true}, "2024-01-03": {"isBookable": false}}

    Files ending in ``.yaml``/``.yml`` are read as YAML, anything else as JSON.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._days = self._load()

    def _load(self) -> Dict[str, DayStatus]:
        """Load and validate the bookability file."""
        if not self.path.exists():
            raise FileNotFoundError(f"Availability file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                if self.path.suffix.lower() in (".yaml", ".yml"):
                    data: Any = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ValueError(f"Invalid availability data in {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Availability file must contain a mapping at the root level.")

        days = bookability_from_dict(data)
        logger.debug("Loaded %d days of availability from %s", len(days), self.path)
        return days

    async def get_bookability(
        self,
        start: DateTime,
        end: DateTime,
        utc_offset_minutes: int,
    ) -> BookabilityMap:
        """
        Return the days of the file that fall inside the requested window.

        Args:
            start: Start of the window
            end: End of the window
            utc_offset_minutes: Offset the day keys are expressed in
        """
        first_day = day_key(in_offset(start, utc_offset_minutes))
        last_day = day_key(in_offset(end, utc_offset_minutes))

        # ISO day keys sort chronologically
        return {
            key: status
            for key, status in self._days.items()
            if first_day <= key <= last_day
        }
