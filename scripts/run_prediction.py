#!/usr/bin/env python
"""Generate one prediction from the command line and append it to the history."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from wellpredict.config import HISTORY_PATH, PREDICTION_DELAY_SECONDS
from wellpredict.errors import PredictionValidationError
from wellpredict.prediction.controller import PredictionController
from wellpredict.prediction.history_store import JsonHistoryStore
from wellpredict.prediction.schemas import PredictionStatus
from wellpredict.reports.pdf_report import save_prediction_report
from wellpredict.services.geolocation import resolve_location


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--soil", required=True, help="clay, sandy, loamy or rocky")
    parser.add_argument("--rock", required=True, help="sedimentary, igneous or metamorphic")
    parser.add_argument("--depth", type=int, required=True, help="drilling depth in metres (10-200)")
    parser.add_argument("--lat", type=float, help="latitude; defaults to the fallback site")
    parser.add_argument("--lon", type=float, help="longitude; defaults to the fallback site")
    parser.add_argument("--delay", type=float, default=PREDICTION_DELAY_SECONDS)
    parser.add_argument("--history", type=Path, default=HISTORY_PATH)
    parser.add_argument("--report", action="store_true", help="also write a PDF report")
    return parser.parse_args(argv)


async def run(args) -> int:
    location = resolve_location(args.lat, args.lon)
    controller = PredictionController(JsonHistoryStore(args.history), delay=args.delay)

    try:
        task = controller.submit({
            "soil_type": args.soil,
            "rock_type": args.rock,
            "depth": args.depth,
            "latitude": location.latitude,
            "longitude": location.longitude,
        })
    except PredictionValidationError as e:
        print(f"ERROR: {e}")
        for err in e.errors:
            print(f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}")
        return 1

    print("Generating prediction …")
    await task

    if controller.status is PredictionStatus.FAILED:
        print(f"ERROR: {controller.last_error}")
        return 1

    result = controller.current
    print("\n" + "=" * 60)
    print("PREDICTION")
    print("=" * 60)
    print(f"Confidence:       {result.confidence}%")
    print(f"Water level:      {result.water_level} m")
    print(f"Estimated yield:  {result.estimated_yield}")
    print(f"Recommendation:   {result.recommendation}")
    print(f"Best time:        {result.best_time}")
    for point in result.chart_data:
        print(f"  {point.label:<16}{point.value}%")
    print(f"History size:     {len(controller.history)}")
    print("=" * 60)

    if args.report:
        path = save_prediction_report(result)
        print(f"Report saved: {path}")
    return 0


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    sys.exit(asyncio.run(run(parse_args())))


if __name__ == "__main__":
    main()
