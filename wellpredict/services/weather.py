"""Mock weather data for a site and its effect on groundwater work.

There is no upstream weather API; readings are drawn from fixed uniform
ranges so the dashboard has something plausible to render.
"""

import asyncio
import logging
from datetime import date

import numpy as np
import pandas as pd
from pydantic import BaseModel

from wellpredict.config import WEATHER_HISTORY_DAYS, WEATHER_SEED

logger = logging.getLogger(__name__)


class CurrentWeather(BaseModel):
    temperature: int
    humidity: int
    description: str = "Partly cloudy"
    wind_speed: int
    pressure: int
    location: str = "Current Location"


class WeatherDay(BaseModel):
    date: date
    temperature: int
    humidity: int
    rainfall: int


class WeatherImpact(BaseModel):
    temperature: int
    humidity: int
    impact: str
    recommendation: str


def assess_weather_impact(weather: CurrentWeather | None) -> WeatherImpact:
    """Translate current conditions into drilling/groundwater advice."""
    if weather is None:
        return WeatherImpact(
            temperature=0, humidity=0,
            impact="No data available",
            recommendation="Moderate humidity levels detected",
        )

    if weather.temperature > 30:
        impact = "High evaporation may lower water levels"
    elif weather.temperature < 10:
        impact = "Cold weather may affect drilling operations"
    else:
        impact = "Optimal temperature for drilling operations"

    if weather.humidity > 70:
        recommendation = "High humidity indicates good groundwater conditions"
    elif weather.humidity < 30:
        recommendation = "Low humidity may indicate dry conditions"
    else:
        recommendation = "Moderate humidity levels detected"

    return WeatherImpact(
        temperature=weather.temperature,
        humidity=weather.humidity,
        impact=impact,
        recommendation=recommendation,
    )


class WeatherService:

    def __init__(self, seed: int | None = WEATHER_SEED):
        self.rng = np.random.default_rng(seed)

    def _uniform(self, low: float, span: float) -> int:
        return int(round(low + self.rng.random() * span))

    async def get_current_weather(self, latitude: float, longitude: float) -> CurrentWeather:
        logger.debug("Mock current weather for (%.4f, %.4f)", latitude, longitude)
        await asyncio.sleep(0)
        return CurrentWeather(
            temperature=self._uniform(20, 15),
            humidity=self._uniform(40, 40),
            wind_speed=self._uniform(0, 10),
            pressure=self._uniform(1000, 50),
        )

    async def get_weather_history(self, latitude: float, longitude: float,
                                  days: int = WEATHER_HISTORY_DAYS) -> list[WeatherDay]:
        """Daily readings for the last ``days`` days, oldest first, ending today."""
        logger.debug("Mock %d-day weather history for (%.4f, %.4f)", days, latitude, longitude)
        await asyncio.sleep(0)
        dates = pd.date_range(end=pd.Timestamp.today().normalize(), periods=days, freq="D")
        return [
            WeatherDay(
                date=ts.date(),
                temperature=self._uniform(20, 15),
                humidity=self._uniform(40, 40),
                rainfall=self._uniform(0, 10),
            )
            for ts in dates
        ]
