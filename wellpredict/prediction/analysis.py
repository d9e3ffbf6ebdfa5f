"""Tabular views and summaries of the prediction history."""

import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from wellpredict.config import REPORTS_DIR
from wellpredict.prediction.schemas import PredictionResult

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = [
    "id", "timestamp", "latitude", "longitude", "confidence",
    "water_level", "estimated_yield", "recommendation",
]


def history_frame(history: Sequence[PredictionResult]) -> pd.DataFrame:
    """One row per prediction, chart points flattened to columns."""
    rows = []
    for result in history:
        row = {
            "id": result.id,
            "timestamp": result.timestamp,
            "latitude": result.location.latitude,
            "longitude": result.location.longitude,
            "confidence": result.confidence,
            "water_level": result.water_level,
            "estimated_yield": result.estimated_yield,
            "recommendation": result.recommendation,
        }
        for point in result.chart_data:
            row[point.label.lower().replace(" ", "_")] = point.value
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    return pd.DataFrame(rows)


def summarize_history(history: Sequence[PredictionResult]) -> dict:
    """Count, confidence spread and recommendation mix of the history."""
    df = history_frame(history)
    if df.empty:
        return {
            "count": 0,
            "mean_confidence": None,
            "min_confidence": None,
            "max_confidence": None,
            "mean_water_level": None,
            "recommendations": {},
        }

    return {
        "count": int(len(df)),
        "mean_confidence": round(float(df["confidence"].mean()), 2),
        "min_confidence": int(df["confidence"].min()),
        "max_confidence": int(df["confidence"].max()),
        "mean_water_level": round(float(df["water_level"].mean()), 2),
        "recommendations": {
            str(k): int(v) for k, v in df["recommendation"].value_counts().items()
        },
    }


def export_history_csv(history: Sequence[PredictionResult],
                       save_dir: Path | None = None) -> Path:
    save_dir = save_dir or REPORTS_DIR
    save_dir.mkdir(parents=True, exist_ok=True)

    path = save_dir / "prediction_history.csv"
    history_frame(history).to_csv(path, index=False)
    logger.info("Exported %d predictions to %s", len(history), path)
    return path
