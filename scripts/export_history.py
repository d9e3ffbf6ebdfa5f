#!/usr/bin/env python
"""Export the stored prediction history to CSV and print a summary."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from wellpredict.prediction.analysis import export_history_csv, summarize_history
from wellpredict.prediction.history_store import JsonHistoryStore


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    history = JsonHistoryStore().load()
    if not history:
        print("No predictions stored yet.")
        return

    path = export_history_csv(history)
    summary = summarize_history(history)
    print(f"Exported {summary['count']} predictions to {path}")
    print(f"Confidence: mean={summary['mean_confidence']:.2f}, "
          f"min={summary['min_confidence']}, max={summary['max_confidence']}")
    for text, n in summary["recommendations"].items():
        print(f"  {n:>4}  {text}")


if __name__ == "__main__":
    main()
