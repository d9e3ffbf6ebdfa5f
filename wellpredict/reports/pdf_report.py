"""Single-page PDF report for a prediction result."""

import io
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from wellpredict.config import REPORTS_DIR
from wellpredict.prediction.schemas import PredictionResult

logger = logging.getLogger(__name__)


def _summary_lines(result: PredictionResult) -> list[str]:
    return [
        f"Prediction #{result.id}",
        f"Generated: {result.timestamp:%Y-%m-%d %H:%M UTC}",
        f"Location: {result.location.latitude:.6f}, {result.location.longitude:.6f}",
        "",
        f"Confidence: {result.confidence}%",
        f"Water level: {result.water_level} m",
        f"Estimated yield: {result.estimated_yield}",
        f"Best time to drill: {result.best_time}",
        "",
        f"Recommendation: {result.recommendation}",
    ]


def render_prediction_report(result: PredictionResult) -> bytes:
    """Render ``result`` to PDF bytes: summary text above a factor bar chart."""
    buffer = io.BytesIO()
    fig, (ax_text, ax_chart) = plt.subplots(
        2, 1, figsize=(8.27, 11.69), gridspec_kw={"height_ratios": [1, 1.2]},
    )
    fig.suptitle("Water Well Prediction Report", fontsize=16, fontweight="bold")

    ax_text.axis("off")
    ax_text.text(0.02, 0.98, "\n".join(_summary_lines(result)),
                 va="top", ha="left", fontsize=11, family="monospace",
                 transform=ax_text.transAxes)

    labels = [p.label for p in result.chart_data]
    values = [p.value for p in result.chart_data]
    bars = ax_chart.bar(labels, values, color=["#8b5a2b", "#708090", "#4682b4", "#2e8b57"])
    ax_chart.set_ylim(0, 100)
    ax_chart.set_ylabel("Score (%)")
    ax_chart.set_title("Prediction Factors")
    for bar, value in zip(bars, values):
        ax_chart.annotate(f"{value}%", (bar.get_x() + bar.get_width() / 2, value),
                          ha="center", va="bottom", fontsize=10)

    try:
        with PdfPages(buffer) as pdf:
            pdf.savefig(fig)
    finally:
        plt.close(fig)

    logger.info("Rendered PDF report for prediction %d", result.id)
    return buffer.getvalue()


def save_prediction_report(result: PredictionResult,
                           save_dir: Path | None = None) -> Path:
    save_dir = save_dir or REPORTS_DIR
    save_dir.mkdir(parents=True, exist_ok=True)

    path = save_dir / f"water-well-prediction-{result.id}.pdf"
    path.write_bytes(render_prediction_report(result))
    logger.info("Saved report %s", path)
    return path
