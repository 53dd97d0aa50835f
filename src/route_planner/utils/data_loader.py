import logging
from typing import List

import pandas as pd

from ..exceptions import InvalidInputLocation
from ..models.stop import Coordinate, Stop

logger = logging.getLogger(__name__)


class StopDataLoader:
    """Loads stops from a CSV with latitude/longitude and optional label/address columns.

    Row order is kept: the first row is the origin.
    """

    def __init__(self, filepath: str):
        try:
            self.data = pd.read_csv(filepath)
            self.preprocess_data()
            self.validate_data()
            logger.debug(f"Loaded {len(self.data)} stops")
        except Exception as e:
            logger.error(f"Failed to load data: {e}")
            raise

    def preprocess_data(self) -> None:
        """Normalise column names and drop rows without coordinates"""
        self.data.columns = [str(col).strip().lower() for col in self.data.columns]
        self.data = self.data.rename(columns={"lat": "latitude", "lng": "longitude", "lon": "longitude"})

        required_columns = ["latitude", "longitude"]
        missing_cols = [col for col in required_columns if col not in self.data.columns]
        if missing_cols:
            raise InvalidInputLocation(f"Missing required columns: {missing_cols}")

        initial_count = len(self.data)
        self.data["latitude"] = pd.to_numeric(self.data["latitude"], errors="coerce")
        self.data["longitude"] = pd.to_numeric(self.data["longitude"], errors="coerce")
        self.data = self.data.dropna(subset=["latitude", "longitude"])
        cleaned_count = len(self.data)

        if initial_count != cleaned_count:
            logger.warning(f"Removed {initial_count - cleaned_count} rows with invalid coordinates")

        self.data = self.data.reset_index(drop=True)

    def validate_data(self) -> None:
        """Validate the loaded coordinates"""
        if self.data.empty:
            raise InvalidInputLocation("No stops with valid coordinates")

        if not self.data["latitude"].between(-90, 90).all():
            raise InvalidInputLocation("Latitude values outside [-90, 90]")
        if not self.data["longitude"].between(-180, 180).all():
            raise InvalidInputLocation("Longitude values outside [-180, 180]")

    def get_stops(self) -> List[Stop]:
        stops = []
        for row in self.data.itertuples(index=False):
            label = getattr(row, "label", None)
            address = getattr(row, "address", None)
            stops.append(Stop(
                Coordinate(float(row.latitude), float(row.longitude)),
                label=None if pd.isna(label) else str(label),
                address=None if pd.isna(address) else str(address),
            ))
        return stops
