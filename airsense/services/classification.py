"""Air quality classification against WHO 2021 guideline thresholds."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

LOGGER = logging.getLogger(__name__)

THRESHOLD_SOURCE = "WHO 2021"


class Pollutant(str, Enum):
    O3 = "O3"
    PM10 = "PM10"
    PM25 = "PM2.5"
    SO2 = "SO2"
    NO2 = "NO2"
    CO = "CO"
    NO = "NO"

    def __str__(self) -> str:
        return self.value


class QualityTier(str, Enum):
    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"
    UNAVAILABLE = "Unavailable"

    def __str__(self) -> str:
        return self.value


class UnavailableReason(str, Enum):
    MISSING_VALUE = "missing_value"
    UNKNOWN_POLLUTANT = "unknown_pollutant"
    UNSUPPORTED_WINDOW = "unsupported_window"


@dataclass(frozen=True)
class PollutantThreshold:
    pollutant: Pollutant
    exposure_hours: int
    good_limit: float
    moderate_limit: float

    def __post_init__(self) -> None:
        if self.exposure_hours <= 0:
            raise ValueError(f"exposure_hours must be positive, got {self.exposure_hours}")
        if self.good_limit < 0 or self.moderate_limit < self.good_limit:
            raise ValueError(
                f"Invalid limits for {self.pollutant} {self.exposure_hours}h: "
                f"{self.good_limit} / {self.moderate_limit}"
            )


@dataclass(frozen=True)
class ReferenceThresholds:
    good_limit: float
    moderate_limit: float
    exposure_hours: int
    source: str = THRESHOLD_SOURCE


@dataclass(frozen=True)
class ClassificationResult:
    tier: QualityTier
    color: str
    description: str
    reference: Optional[ReferenceThresholds] = None
    reason: Optional[UnavailableReason] = None

    @property
    def is_available(self) -> bool:
        return self.tier is not QualityTier.UNAVAILABLE

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "tier": self.tier.value,
            "color": self.color,
            "description": self.description,
        }
        if self.reference is not None:
            payload["reference"] = {
                "good": self.reference.good_limit,
                "moderate": self.reference.moderate_limit,
                "exposure_hours": self.reference.exposure_hours,
                "source": self.reference.source,
            }
        return payload


TIER_COLORS: Mapping[QualityTier, str] = MappingProxyType(
    {
        QualityTier.GOOD: "#00E400",
        QualityTier.MODERATE: "#FFFF00",
        QualityTier.POOR: "#FF0000",
        QualityTier.UNAVAILABLE: "#9E9E9E",
    }
)

TIER_DESCRIPTIONS: Mapping[QualityTier, str] = MappingProxyType(
    {
        QualityTier.GOOD: "Air quality meets WHO standards and poses no health risk.",
        QualityTier.MODERATE: (
            "Air quality exceeds WHO recommendations. May affect sensitive groups "
            "(children, elderly, respiratory conditions)."
        ),
        QualityTier.POOR: (
            "Air quality significantly exceeds safe WHO limits and may affect the "
            "health of the general population."
        ),
    }
)

# Short legend text, independent of any measurement.
TIER_SUMMARIES: Mapping[QualityTier, str] = MappingProxyType(
    {
        QualityTier.GOOD: "Air quality is satisfactory and poses no health risk.",
        QualityTier.MODERATE: "Air quality is acceptable but may affect sensitive people.",
        QualityTier.POOR: "Air quality is poor and may affect the health of the population.",
        QualityTier.UNAVAILABLE: "No information available.",
    }
)

MISSING_VALUE_DESCRIPTION = "No data available for this measurement."


def _build_table(
    limits: Dict[Pollutant, Dict[int, Tuple[float, float]]],
) -> Mapping[str, Mapping[int, PollutantThreshold]]:
    table = {}
    for pollutant, windows in limits.items():
        table[pollutant.value] = MappingProxyType(
            {
                hours: PollutantThreshold(pollutant, hours, good, moderate)
                for hours, (good, moderate) in windows.items()
            }
        )
    return MappingProxyType(table)


WHO_2021_THRESHOLDS = _build_table(
    {
        Pollutant.O3: {1: (100, 160), 8: (60, 100)},
        Pollutant.PM10: {1: (50, 100), 24: (45, 75)},
        Pollutant.PM25: {1: (15, 25), 24: (15, 25)},
        Pollutant.SO2: {1: (100, 196), 3: (100, 250), 24: (40, 125)},
        Pollutant.NO2: {1: (200, 360), 24: (25, 50)},
        Pollutant.CO: {1: (4000, 10000), 8: (7000, 10000)},
        Pollutant.NO: {1: (100, 200)},
    }
)


def _symbol(pollutant: object) -> object:
    return pollutant.value if isinstance(pollutant, Enum) else pollutant


def _as_number(value: object) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    except OverflowError:
        # integers and fractions beyond float range saturate to infinity
        try:
            return math.inf if value > 0 else -math.inf  # type: ignore[operator]
        except TypeError:
            return None
    if math.isnan(number):
        return None
    return number


def _windows_for(pollutant: object) -> Optional[Mapping[int, PollutantThreshold]]:
    try:
        return WHO_2021_THRESHOLDS.get(_symbol(pollutant))  # type: ignore[arg-type]
    except TypeError:
        # unhashable identifiers
        return None


def _window_key(exposure_hours: object) -> Optional[float]:
    hours = _as_number(exposure_hours)
    if hours is None or math.isinf(hours):
        return None
    return int(hours) if hours.is_integer() else hours


def _window_text(exposure_hours: object) -> str:
    key = _window_key(exposure_hours)
    if key is not None:
        return str(key)
    hours = _as_number(exposure_hours)
    if hours is not None:
        # infinite, or an integer too long to print
        return str(hours)
    return str(exposure_hours)


def lookup_threshold(pollutant: object, exposure_hours: object) -> Optional[PollutantThreshold]:
    """Return the threshold pair for an exact (pollutant, window) match."""
    windows = _windows_for(pollutant)
    key = _window_key(exposure_hours)
    if windows is None or key is None:
        return None
    return windows.get(key)  # type: ignore[arg-type]


def supported_windows(pollutant: object) -> Tuple[int, ...]:
    windows = _windows_for(pollutant)
    if windows is None:
        return ()
    return tuple(sorted(windows))


def describe_tier(tier: object) -> str:
    """Generic legend text for a tier, or a fallback for anything unrecognised."""
    try:
        return TIER_SUMMARIES[QualityTier(tier)]
    except (ValueError, KeyError, TypeError):
        return "No description available."


def _unavailable(reason: UnavailableReason, description: str) -> ClassificationResult:
    return ClassificationResult(
        tier=QualityTier.UNAVAILABLE,
        color=TIER_COLORS[QualityTier.UNAVAILABLE],
        description=description,
        reason=reason,
    )


def classify(pollutant: object, value: object, exposure_hours: object) -> ClassificationResult:
    """Classify a concentration for a pollutant and exposure window.

    Never raises: missing values, unknown pollutants and unconfigured
    windows all resolve to an ``Unavailable`` result whose ``reason`` tells
    them apart. Windows are matched exactly, there is no nearest-window
    fallback. Both limits are inclusive.
    """
    LOGGER.debug(
        "classify pollutant=%r value=%r exposure_hours=%r", pollutant, value, exposure_hours
    )
    number = _as_number(value)
    if number is None:
        LOGGER.debug("No usable value for %r", pollutant)
        return _unavailable(UnavailableReason.MISSING_VALUE, MISSING_VALUE_DESCRIPTION)

    symbol = _symbol(pollutant)
    windows = _windows_for(pollutant)
    if windows is None:
        LOGGER.debug("No thresholds configured for pollutant %r", symbol)
        return _unavailable(
            UnavailableReason.UNKNOWN_POLLUTANT,
            f"No reference thresholds for {symbol}.",
        )

    threshold = lookup_threshold(pollutant, exposure_hours)
    if threshold is None:
        LOGGER.debug("No %r window for pollutant %r", exposure_hours, symbol)
        return _unavailable(
            UnavailableReason.UNSUPPORTED_WINDOW,
            f"No reference thresholds for {symbol} with {_window_text(exposure_hours)}h exposure.",
        )

    if number <= threshold.good_limit:
        tier = QualityTier.GOOD
    elif number <= threshold.moderate_limit:
        tier = QualityTier.MODERATE
    else:
        tier = QualityTier.POOR

    LOGGER.debug(
        "%s %sh value=%s limits=(%s, %s) -> %s",
        symbol,
        threshold.exposure_hours,
        number,
        threshold.good_limit,
        threshold.moderate_limit,
        tier.value,
    )
    return ClassificationResult(
        tier=tier,
        color=TIER_COLORS[tier],
        description=TIER_DESCRIPTIONS[tier],
        reference=ReferenceThresholds(
            good_limit=threshold.good_limit,
            moderate_limit=threshold.moderate_limit,
            exposure_hours=threshold.exposure_hours,
        ),
    )
