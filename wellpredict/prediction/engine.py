"""Deterministic groundwater scoring.

Maps a ``PredictionRequest`` to a ``PredictionResult`` from three lookup
factors (soil, rock, depth). Apart from ``id`` and ``timestamp`` the
result depends only on the request.
"""

import logging
import math
import threading
import time
from datetime import datetime, timezone

from wellpredict.config import (
    SOIL_SCORES, ROCK_SCORES, DEFAULT_FACTOR,
    DEPTH_FACTORS, SHALLOW_DEPTH_FACTOR,
    WATER_LEVEL_RATIO, YIELD_PER_METRE,
    RECOMMENDATIONS, POOR_RECOMMENDATION, BEST_DRILLING_TIME,
)
from wellpredict.prediction.schemas import (
    ChartPoint, Location, PredictionRequest, PredictionResult,
)

logger = logging.getLogger(__name__)

_id_lock = threading.Lock()
_last_id = 0


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (``Math.round`` semantics)."""
    return int(math.floor(value + 0.5))


def next_result_id() -> int:
    """Millisecond timestamp, bumped when two results share a millisecond."""
    global _last_id
    with _id_lock:
        candidate = time.time_ns() // 1_000_000
        _last_id = max(candidate, _last_id + 1)
        return _last_id


def _category(value) -> str:
    return getattr(value, "value", value)


def soil_factor(soil_type) -> float:
    return SOIL_SCORES.get(_category(soil_type), DEFAULT_FACTOR)


def rock_factor(rock_type) -> float:
    return ROCK_SCORES.get(_category(rock_type), DEFAULT_FACTOR)


def depth_factor(depth: int) -> float:
    for lower_bound, factor in DEPTH_FACTORS:
        if depth > lower_bound:
            return factor
    return SHALLOW_DEPTH_FACTOR


def recommend(confidence: int) -> str:
    """Pick the advisory text. Thresholds are strict: 70 is not excellent."""
    for threshold, text in RECOMMENDATIONS:
        if confidence > threshold:
            return text
    return POOR_RECOMMENDATION


def water_level_for(depth: int, confidence: int) -> int:
    return round_half_up(depth * (confidence / 100) * WATER_LEVEL_RATIO)


def yield_for(water_level: int) -> int:
    return round_half_up(water_level * YIELD_PER_METRE)


def score(request: PredictionRequest) -> PredictionResult:
    """Score a validated request.

    Parameters
    ----------
    request : PredictionRequest
        Already validated by the caller; unknown categories fall back to
        ``DEFAULT_FACTOR`` instead of raising.

    Returns
    -------
    PredictionResult with confidence, water level, yield, recommendation
    and the four-point chart breakdown.
    """
    soil = soil_factor(request.soil_type)
    rock = rock_factor(request.rock_type)
    depth = depth_factor(request.depth)

    confidence = round_half_up((soil + rock + depth) / 3 * 100)
    water_level = water_level_for(request.depth, confidence)

    result = PredictionResult(
        id=next_result_id(),
        confidence=confidence,
        water_level=water_level,
        estimated_yield=yield_for(water_level),
        recommendation=recommend(confidence),
        best_time=BEST_DRILLING_TIME,
        location=Location(latitude=request.latitude, longitude=request.longitude),
        timestamp=datetime.now(timezone.utc),
        chart_data=[
            ChartPoint(label="Soil Quality", value=round_half_up(soil * 100)),
            ChartPoint(label="Rock Formation", value=round_half_up(rock * 100)),
            ChartPoint(label="Depth Factor", value=round_half_up(depth * 100)),
            ChartPoint(label="Overall Score", value=confidence),
        ],
    )
    logger.debug("Scored %s/%s at %d m -> confidence %d",
                 _category(request.soil_type), _category(request.rock_type),
                 request.depth, confidence)
    return result
