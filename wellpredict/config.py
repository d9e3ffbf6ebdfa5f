import os
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
ARTIFACTS_DIR = Path(os.environ.get("WELLPREDICT_ARTIFACTS_DIR", ROOT_DIR / "artifacts"))
REPORTS_DIR = ARTIFACTS_DIR / "reports"
HISTORY_PATH = ARTIFACTS_DIR / "predictions.json"

SOIL_SCORES = {
    "clay": 0.8,
    "sandy": 0.4,
    "loamy": 0.7,
    "rocky": 0.3,
}
ROCK_SCORES = {
    "sedimentary": 0.9,
    "igneous": 0.5,
    "metamorphic": 0.6,
}
DEFAULT_FACTOR = 0.5

# (exclusive lower bound in metres, factor), checked in order
DEPTH_FACTORS = [
    (50, 0.8),
    (30, 0.6),
]
SHALLOW_DEPTH_FACTOR = 0.4

MIN_DEPTH_M = 10
MAX_DEPTH_M = 200

WATER_LEVEL_RATIO = 0.8
YIELD_PER_METRE = 1.5

RECOMMENDATIONS = [
    (70, "Excellent location for drilling"),
    (50, "Good potential, proceed with caution"),
]
POOR_RECOMMENDATION = "Poor location, consider alternative sites"
BEST_DRILLING_TIME = "Early monsoon season (June-July)"

PREDICTION_DELAY_SECONDS = float(os.environ.get("WELLPREDICT_PREDICTION_DELAY", "2.0"))

FALLBACK_LATITUDE = 40.7128
FALLBACK_LONGITUDE = -74.0060
FALLBACK_ACCURACY_M = 1000.0

EARTH_RADIUS_KM = 6371.0
TILE_LAYERS = {
    "street": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
    "satellite": "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
    "terrain": "https://{s}.tile.opentopomap.org/{z}/{x}/{y}.png",
}

WEATHER_HISTORY_DAYS = 7
WEATHER_SEED = None

CHAT_REPLY_DELAY_SECONDS = 0.0
CHAT_TRANSCRIPT_LIMIT = 200

API_HOST = os.environ.get("WELLPREDICT_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("WELLPREDICT_PORT", "8000"))


def _parse_tokens(raw: str) -> dict[str, str]:
    """Parse ``user:token,user2:token2`` into a token -> user mapping."""
    tokens = {}
    for pair in raw.split(","):
        user, sep, token = pair.strip().partition(":")
        if sep and user and token:
            tokens[token] = user
    return tokens


API_TOKENS = _parse_tokens(os.environ.get("WELLPREDICT_API_TOKENS", ""))
