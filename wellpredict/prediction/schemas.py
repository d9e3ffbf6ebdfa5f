"""Pydantic models for prediction requests, results, and controller state."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from wellpredict.config import MIN_DEPTH_M, MAX_DEPTH_M


class SoilType(str, Enum):
    CLAY = "clay"
    SANDY = "sandy"
    LOAMY = "loamy"
    ROCKY = "rocky"


class RockType(str, Enum):
    SEDIMENTARY = "sedimentary"
    IGNEOUS = "igneous"
    METAMORPHIC = "metamorphic"


class PredictionStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PredictionRequest(BaseModel):
    """Parameters for a single groundwater prediction."""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    soil_type: SoilType = Field(..., description="Dominant soil type at the site")
    rock_type: RockType = Field(..., description="Underlying rock formation")
    depth: int = Field(..., ge=MIN_DEPTH_M, le=MAX_DEPTH_M, description="Planned drilling depth (m)")
    latitude: float = Field(..., ge=-90, le=90, description="Site latitude (degrees)")
    longitude: float = Field(..., ge=-180, le=180, description="Site longitude (degrees)")


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class ChartPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: int


class PredictionResult(BaseModel):
    """Output of one scoring run. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Creation time in ms, unique per process")
    confidence: int = Field(..., ge=0, le=100, description="Confidence percent")
    water_level: int = Field(..., description="Expected water level (m)")
    estimated_yield: int = Field(..., description="Estimated yield")
    recommendation: str
    best_time: str
    location: Location
    timestamp: datetime
    chart_data: list[ChartPoint]


class LifecycleState(BaseModel):
    """Snapshot of the prediction controller."""
    status: PredictionStatus = PredictionStatus.IDLE
    current: PredictionResult | None = None
    history: list[PredictionResult] = Field(default_factory=list)
    last_error: str | None = None
