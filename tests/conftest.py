"""
Pytest configuration for AirSense tests.

Provides a small station catalog shared by the filter chain, panel and CLI
tests.
"""

import pandas as pd
import pytest

from airsense.data.catalog import StationCatalog


def _tables():
    municipalities = pd.DataFrame(
        [
            {"municipality_id": 1, "name": "Valle Norte", "latitude": 6.25, "longitude": -75.56},
            {"municipality_id": 2, "name": "Sabaneta", "latitude": 6.15, "longitude": -75.61},
            {"municipality_id": 3, "name": "Sin Datos", "latitude": 6.0, "longitude": -75.0},
        ]
    )
    stations = pd.DataFrame(
        [
            {"station_id": 10, "name": "Universidad", "station_type": "urban", "municipality_id": 1},
            {"station_id": 11, "name": "Aeropuerto", "station_type": "suburban", "municipality_id": 1},
            {"station_id": 12, "name": "Nueva", "station_type": "urban", "municipality_id": 1},
            {"station_id": 20, "name": "Parque", "station_type": "background", "municipality_id": 2},
        ]
    )
    station_locations = pd.DataFrame(
        [
            {"location_id": 100, "station_id": 10, "latitude": 6.20, "longitude": -75.50, "year": 2018},
            {"location_id": 101, "station_id": 10, "latitude": 6.21, "longitude": -75.51, "year": 2021},
            {"location_id": 110, "station_id": 11, "latitude": 6.30, "longitude": -75.60, "year": 2019},
            {"location_id": 120, "station_id": 12, "latitude": 6.40, "longitude": -75.70, "year": 2022},
            {"location_id": 200, "station_id": 20, "latitude": 6.15, "longitude": -75.61, "year": 2015},
        ]
    )
    exposures = pd.DataFrame(
        [
            {"exposure_id": 1, "pollutant": "PM2.5", "unit": "µg/m³", "hours": 24, "is_pollutant": True},
            {"exposure_id": 2, "pollutant": "PM2.5", "unit": "µg/m³", "hours": 1, "is_pollutant": True},
            {"exposure_id": 3, "pollutant": "O3", "unit": "µg/m³", "hours": 8, "is_pollutant": True},
            {"exposure_id": 4, "pollutant": "TEMP", "unit": "°C", "hours": 1, "is_pollutant": False},
            {"exposure_id": 5, "pollutant": "CO", "unit": "µg/m³", "hours": 8, "is_pollutant": True},
        ]
    )
    base = {
        "median": 10.0,
        "p98": 30.0,
        "max": 45.0,
        "min": 2.0,
        "exceedances": 3,
        "exceedance_pct": 1.5,
        "exceedance_days": 2,
        "missing": 12,
        "temporal_coverage": 87.5,
        "max_at": "2020-03-14 08:00",
        "min_at": "2020-07-02 03:00",
    }
    measurements = pd.DataFrame(
        [
            {**base, "measurement_id": 1, "station_id": 10, "year": 2020, "exposure_id": 1, "mean": 12.0},
            {**base, "measurement_id": 2, "station_id": 10, "year": 2020, "exposure_id": 2, "mean": 20.0},
            {**base, "measurement_id": 3, "station_id": 10, "year": 2020, "exposure_id": 3, "mean": 75.0},
            {**base, "measurement_id": 4, "station_id": 10, "year": 2020, "exposure_id": 4, "mean": 24.0},
            {**base, "measurement_id": 5, "station_id": 10, "year": 2022, "exposure_id": 1, "mean": 30.0},
            {**base, "measurement_id": 6, "station_id": 11, "year": 2020, "exposure_id": 5, "mean": 10000.0},
            {**base, "measurement_id": 7, "station_id": 12, "year": 2020, "exposure_id": 1, "mean": 8.0},
            {**base, "measurement_id": 8, "station_id": 12, "year": 2022, "exposure_id": 1, "mean": None},
            {**base, "measurement_id": 9, "station_id": 20, "year": 2019, "exposure_id": 1, "mean": 14.0},
        ]
    )
    pollutant_dictionary = pd.DataFrame(
        [
            {
                "pollutant_id": 1, "symbol": "PM2.5", "name": "Fine particulate matter",
                "what_it_is": "Particles smaller than 2.5 micrometres.",
                "causes": "Combustion and traffic.", "consequences": "Reaches deep into the lungs.",
                "color_hex": "#8E24AA", "active": True, "display_order": 2,
            },
            {
                "pollutant_id": 2, "symbol": "O3", "name": "Ozone",
                "what_it_is": "A secondary pollutant formed in sunlight.",
                "causes": None, "consequences": "Irritates the airways.",
                "color_hex": "#1E88E5", "active": True, "display_order": 1,
            },
            {
                "pollutant_id": 3, "symbol": "NO", "name": "Nitric oxide",
                "what_it_is": "A combustion gas.", "causes": "Engines.",
                "consequences": "Converts to NO2.", "color_hex": "#FB8C00",
                "active": False, "display_order": 0,
            },
        ]
    )
    return {
        "municipalities": municipalities,
        "stations": stations,
        "station_locations": station_locations,
        "exposures": exposures,
        "measurements": measurements,
        "pollutant_dictionary": pollutant_dictionary,
    }


@pytest.fixture
def catalog_tables():
    """Fixture providing the raw catalog tables."""
    return _tables()


@pytest.fixture
def catalog(catalog_tables):
    """Fixture providing a StationCatalog built from the sample tables."""
    return StationCatalog.from_frames(**catalog_tables)


@pytest.fixture
def catalog_dir(tmp_path, catalog_tables):
    """Fixture writing the sample tables to CSV files in a temporary directory."""
    for name, frame in catalog_tables.items():
        frame.to_csv(tmp_path / f"{name}.csv", index=False)
    return tmp_path
