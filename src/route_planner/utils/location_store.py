import json
import logging
import os
from typing import Dict, List, Sequence

from .. import config
from ..models.stop import Coordinate

logger = logging.getLogger(__name__)


class LocationStore:
    """Raw coordinates persisted between sessions under a single storage key.

    The file holds a JSON object; ``key`` maps to a list of {lat, lng} objects.
    """

    def __init__(self, path: str = config.STORE_PATH, key: str = config.STORAGE_KEY):
        self.path = path
        self.key = key

    def _read(self) -> Dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable location store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> List[Dict[str, float]]:
        """Stored {lat, lng} objects, or an empty list"""
        locations = self._read().get(self.key) or []
        if not isinstance(locations, list):
            logger.warning(f"Stored '{self.key}' is not a list, ignoring it")
            return []
        logger.debug(f"Loaded {len(locations)} stored locations")
        return locations

    def save(self, coordinates: Sequence[Coordinate]) -> None:
        data = self._read()
        data[self.key] = [coordinate.to_dict() for coordinate in coordinates]

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        logger.info(f"Saved {len(coordinates)} locations to {self.path}")

    def clear(self) -> None:
        data = self._read()
        if self.key not in data:
            return
        del data[self.key]
        if data:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        else:
            os.remove(self.path)
        logger.info(f"Cleared stored locations in {self.path}")
