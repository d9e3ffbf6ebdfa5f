"""Pydantic response/request models for the HTTP API."""

from pydantic import BaseModel, Field

from wellpredict.services.chat import ChatMessage, FAQEntry
from wellpredict.services.geolocation import GeoLocation
from wellpredict.services.mapping import Marker
from wellpredict.services.weather import CurrentWeather, WeatherDay, WeatherImpact


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    prediction_status: str = "idle"
    history_size: int = 0
    pending: int = 0


class HistorySummary(BaseModel):
    count: int
    mean_confidence: float | None = None
    min_confidence: int | None = None
    max_confidence: int | None = None
    mean_water_level: float | None = None
    recommendations: dict[str, int] = Field(default_factory=dict)


class WeatherResponse(BaseModel):
    location: GeoLocation
    current: CurrentWeather
    impact: WeatherImpact


class WeatherHistoryResponse(BaseModel):
    location: GeoLocation
    days: list[WeatherDay]


class SoilRecord(BaseModel):
    id: int
    name: str
    type: str
    category: str
    water_retention: str
    drilling_difficulty: str
    permeability: str
    description: str
    suitability: int
    suitability_band: str


class SoilDataResponse(BaseModel):
    count: int
    items: list[SoilRecord]


class MarkerCreate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class MarkerWithDistance(Marker):
    distance_km: float | None = None


class MarkerListResponse(BaseModel):
    origin: GeoLocation
    markers: list[MarkerWithDistance]
    tile_layers: dict[str, str]


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)


class ChatResponse(BaseModel):
    reply: ChatMessage


class FAQResponse(BaseModel):
    items: list[FAQEntry]


class TranscriptResponse(BaseModel):
    messages: list[ChatMessage]
