import pytest

from wellpredict.prediction.schemas import PredictionRequest


@pytest.fixture
def clay_request():
    return PredictionRequest(
        soil_type="clay",
        rock_type="sedimentary",
        depth=60,
        latitude=40.7128,
        longitude=-74.006,
    )


@pytest.fixture
def clay_payload():
    return {
        "soil_type": "clay",
        "rock_type": "sedimentary",
        "depth": 60,
        "latitude": 40.7128,
        "longitude": -74.006,
    }
