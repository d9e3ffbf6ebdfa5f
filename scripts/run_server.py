#!/usr/bin/env python
"""Serve the water well prediction API with uvicorn."""

import sys
from pathlib import Path

import uvicorn

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from wellpredict.config import API_HOST, API_PORT


def main():
    uvicorn.run("wellpredict.serving.app:app", host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
