"""Municipality, year, station and pollutant filters over the station catalog.

Also serves the pollutant reference dictionary shown beside the map.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pandas as pd

from ..data.catalog import StationCatalog

LOGGER = logging.getLogger(__name__)

STATION_COLUMNS = [
    "station_id",
    "name",
    "station_type",
    "location_id",
    "latitude",
    "longitude",
    "location_year",
]


def exposure_label(hours: float) -> str:
    number = float(hours)
    value = int(number) if number.is_integer() else number
    return "1 hour" if value == 1 else f"{value} hours"


def _as_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "t", "1", "yes"}
    if pd.isna(value):
        return False
    return bool(value)


def list_municipalities(catalog: StationCatalog) -> pd.DataFrame:
    """All municipalities with their map coordinates, ordered by name."""
    columns = ["municipality_id", "name", "latitude", "longitude"]
    return catalog.municipalities[columns].sort_values("name").reset_index(drop=True)


def _municipality_measurements(catalog: StationCatalog, municipality_id: int) -> pd.DataFrame:
    stations = catalog.stations[catalog.stations["municipality_id"] == municipality_id]
    return stations.merge(catalog.measurements, on="station_id", how="inner")


def _latest_locations(locations: pd.DataFrame) -> pd.DataFrame:
    return (
        locations.sort_values(["station_id", "year"], ascending=[True, False])
        .drop_duplicates(subset="station_id", keep="first")
        .rename(columns={"year": "location_year"})
    )


def available_years(catalog: StationCatalog, municipality_id: int) -> Optional[List[int]]:
    """Years with measurements in a municipality, newest first, or None."""
    joined = _municipality_measurements(catalog, municipality_id)
    if joined.empty:
        return None
    return sorted({int(year) for year in joined["year"].dropna()}, reverse=True)


def stations_for_year(catalog: StationCatalog, municipality_id: int, year: int) -> pd.DataFrame:
    """Stations measuring in ``year`` with their latest location up to that year."""
    joined = _municipality_measurements(catalog, municipality_id)
    active = joined[joined["year"] == year][["station_id", "name", "station_type"]]
    active = active.drop_duplicates(subset="station_id")

    locations = catalog.station_locations[catalog.station_locations["year"] <= year]
    latest = _latest_locations(locations)[
        ["station_id", "location_id", "latitude", "longitude", "location_year"]
    ]

    merged = active.merge(latest, on="station_id", how="inner")
    dropped = len(active) - len(merged)
    if dropped:
        LOGGER.debug("Dropped %d stations without a location up to %s", dropped, year)
    return merged.sort_values("name").reset_index(drop=True)[STATION_COLUMNS]


def latest_station_locations(catalog: StationCatalog, municipality_id: int) -> pd.DataFrame:
    """Every station of a municipality placed at its most recent location."""
    stations = catalog.stations[catalog.stations["municipality_id"] == municipality_id]
    latest = _latest_locations(catalog.station_locations)
    merged = stations[["station_id", "name", "station_type"]].merge(
        latest[["station_id", "location_id", "latitude", "longitude", "location_year"]],
        on="station_id",
        how="inner",
    )
    return merged.sort_values("name").reset_index(drop=True)[STATION_COLUMNS]


def pollutant_windows(catalog: StationCatalog, station_id: int, year: int) -> List[Dict[str, object]]:
    """Pollutants measured at a station in a year, grouped with their windows."""
    measurements = catalog.measurements[
        (catalog.measurements["station_id"] == station_id)
        & (catalog.measurements["year"] == year)
    ]
    joined = measurements.merge(catalog.exposures, on="exposure_id", how="inner")
    joined = joined[joined["is_pollutant"].map(_as_flag).astype(bool)]
    joined = joined.drop_duplicates(subset="exposure_id").sort_values(["pollutant", "hours"])

    grouped: Dict[str, Dict[str, object]] = {}
    for _, row in joined.iterrows():
        entry = grouped.setdefault(
            row["pollutant"],
            {"pollutant": row["pollutant"], "unit": row["unit"], "windows": []},
        )
        entry["windows"].append(
            {
                "exposure_id": int(row["exposure_id"]),
                "hours": int(row["hours"]),
                "label": exposure_label(row["hours"]),
            }
        )
    return list(grouped.values())


def measurement_row(
    catalog: StationCatalog,
    station_id: int,
    year: int,
    exposure_id: int,
) -> Optional[pd.Series]:
    """Joined measurement row backing the statistics panel, or None."""
    measurements = catalog.measurements[
        (catalog.measurements["station_id"] == station_id)
        & (catalog.measurements["year"] == year)
        & (catalog.measurements["exposure_id"] == exposure_id)
    ]
    if measurements.empty:
        return None

    stations = catalog.stations.rename(columns={"name": "station_name"})
    municipalities = catalog.municipalities[["municipality_id", "name"]].rename(
        columns={"name": "municipality_name"}
    )
    joined = (
        measurements.merge(stations, on="station_id", how="inner")
        .merge(municipalities, on="municipality_id", how="inner")
        .merge(catalog.exposures, on="exposure_id", how="inner")
    )
    if joined.empty:
        LOGGER.warning(
            "Measurement for station=%s year=%s exposure=%s has dangling references",
            station_id,
            year,
            exposure_id,
        )
        return None
    return joined.iloc[0]


def pollutant_dictionary(catalog: StationCatalog) -> List[Dict[str, object]]:
    """Active pollutant dictionary entries in display order."""
    entries = catalog.pollutant_dictionary
    active = entries[entries["active"].map(_as_flag).astype(bool)]
    active = active.sort_values("display_order", kind="mergesort")

    result = []
    for _, row in active.iterrows():
        result.append(
            {
                "id": int(row["pollutant_id"]),
                "symbol": row["symbol"],
                "name": row["name"],
                "what_it_is": None if pd.isna(row["what_it_is"]) else row["what_it_is"],
                "causes": None if pd.isna(row["causes"]) else row["causes"],
                "consequences": None if pd.isna(row["consequences"]) else row["consequences"],
                "color_hex": row["color_hex"],
            }
        )
    return result
