"""Load the monitoring station catalog from CSV exports."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Sequence

import pandas as pd

from ..utils.config import get_data_root

LOGGER = logging.getLogger(__name__)

TABLE_COLUMNS: Dict[str, Sequence[str]] = {
    "municipalities": ["municipality_id", "name", "latitude", "longitude"],
    "stations": ["station_id", "name", "station_type", "municipality_id"],
    "station_locations": ["location_id", "station_id", "latitude", "longitude", "year"],
    "exposures": ["exposure_id", "pollutant", "unit", "hours", "is_pollutant"],
    "measurements": [
        "measurement_id",
        "station_id",
        "year",
        "exposure_id",
        "mean",
        "median",
        "p98",
        "max",
        "min",
        "exceedances",
        "exceedance_pct",
        "exceedance_days",
        "missing",
        "temporal_coverage",
        "max_at",
        "min_at",
    ],
    "pollutant_dictionary": [
        "pollutant_id",
        "symbol",
        "name",
        "what_it_is",
        "causes",
        "consequences",
        "color_hex",
        "active",
        "display_order",
    ],
}

# Tables that may be absent from a CSV export
OPTIONAL_TABLES = frozenset({"pollutant_dictionary"})


class CatalogError(RuntimeError):
    """Raised when a catalog table is missing or malformed."""


def _check_columns(name: str, frame: pd.DataFrame) -> pd.DataFrame:
    missing = [column for column in TABLE_COLUMNS[name] if column not in frame.columns]
    if missing:
        raise CatalogError(f"{name} table is missing columns: {', '.join(missing)}")
    return frame


@dataclass(frozen=True)
class StationCatalog:
    """In-memory copy of the station tables used by the filter chain."""

    municipalities: pd.DataFrame
    stations: pd.DataFrame
    station_locations: pd.DataFrame
    exposures: pd.DataFrame
    measurements: pd.DataFrame
    pollutant_dictionary: pd.DataFrame = field(
        default_factory=lambda: pd.DataFrame(columns=list(TABLE_COLUMNS["pollutant_dictionary"]))
    )

    @classmethod
    def from_frames(cls, **frames: pd.DataFrame) -> "StationCatalog":
        unknown = set(frames) - set(TABLE_COLUMNS)
        if unknown:
            raise CatalogError(f"Unknown catalog tables: {', '.join(sorted(unknown))}")
        tables = {}
        for name, columns in TABLE_COLUMNS.items():
            frame = frames.get(name)
            if frame is None:
                frame = pd.DataFrame(columns=list(columns))
            tables[name] = _check_columns(name, frame)
        return cls(**tables)

    @classmethod
    def from_directory(cls, root: Optional[Path] = None) -> "StationCatalog":
        root = Path(root) if root is not None else get_data_root()
        tables = {}
        for name in TABLE_COLUMNS:
            path = root / f"{name}.csv"
            if not path.exists():
                if name in OPTIONAL_TABLES:
                    LOGGER.debug("Optional table %s not found, using an empty one", path)
                    continue
                raise CatalogError(f"Catalog file not found: {path}")
            LOGGER.debug("Reading %s", path)
            tables[name] = _check_columns(name, pd.read_csv(path))
        LOGGER.info(
            "Loaded catalog from %s (%d stations, %d measurements)",
            root,
            len(tables["stations"]),
            len(tables["measurements"]),
        )
        return cls(**tables)
