"""Build the statistics panel and tier summaries from measurement rows."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .classification import QualityTier, classify
from .stations import exposure_label

Row = Union[Mapping[str, object], pd.Series]


def _number(value: object) -> Optional[float]:
    """Parse a statistic leniently; unparseable or non-finite values become None."""
    if value is None:
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None
    return number if np.isfinite(number) else None


def _integer(value: object) -> Optional[int]:
    number = _number(value)
    return None if number is None else int(number)


def _text(value: object) -> object:
    if value is None or (isinstance(value, float) and not np.isfinite(value)):
        return None
    return value


def build_statistics_panel(row: Row) -> Dict[str, object]:
    """Shape one joined measurement row into the statistics panel document.

    The classification is computed from the yearly mean only; the maximum
    and 98th percentile are reported but never classified.
    """
    hours = row.get("hours")
    classification = classify(row.get("pollutant"), row.get("mean"), hours)
    return {
        "station": {
            "name": _text(row.get("station_name")),
            "type": _text(row.get("station_type")),
            "municipality": _text(row.get("municipality_name")),
        },
        "year": _integer(row.get("year")),
        "pollutant": {
            "symbol": _text(row.get("pollutant")),
            "unit": _text(row.get("unit")),
            "exposure": {
                "id": _integer(row.get("exposure_id")),
                "hours": _integer(hours),
                "label": exposure_label(hours) if _integer(hours) is not None else None,
            },
        },
        "statistics": {
            "mean": _number(row.get("mean")),
            "median": _number(row.get("median")),
            "p98": _number(row.get("p98")),
            "max": _number(row.get("max")),
            "min": _number(row.get("min")),
            "max_at": _text(row.get("max_at")),
            "min_at": _text(row.get("min_at")),
        },
        "exceedances": {
            "days": _integer(row.get("exceedance_days")),
            "count": _integer(row.get("exceedances")),
            "percentage": _number(row.get("exceedance_pct")),
        },
        "data_quality": {
            "temporal_coverage": _number(row.get("temporal_coverage")),
        },
        "classification": classification.to_dict(),
    }


def classify_statistics_frame(frame: pd.DataFrame, value_column: str = "mean") -> pd.DataFrame:
    """Return a copy of ``frame`` with tier, color and description columns."""
    result = frame.copy()
    if frame.empty:
        for column in ("tier", "color", "description"):
            result[column] = pd.Series(dtype=object)
        return result

    classified = [
        classify(pollutant, value, hours)
        for pollutant, value, hours in zip(
            frame["pollutant"], frame[value_column], frame["hours"]
        )
    ]
    result["tier"] = [item.tier.value for item in classified]
    result["color"] = [item.color for item in classified]
    result["description"] = [item.description for item in classified]
    return result


def summarize_tiers(frame: pd.DataFrame) -> Dict[str, int]:
    """Count classified rows per tier; every tier is present in the result."""
    counts = {tier.value: 0 for tier in QualityTier}
    if not frame.empty:
        for tier, count in frame["tier"].value_counts().items():
            counts[str(tier)] = int(count)
    counts["record_count"] = int(len(frame))
    return counts
