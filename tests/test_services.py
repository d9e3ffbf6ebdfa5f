"""Unit tests for the weather, soil catalog, map, geolocation and chat services."""

import asyncio

import pytest

from wellpredict.services.chat import ChatResponder, FAQ, FALLBACK_REPLY, GREETING
from wellpredict.services.geolocation import resolve_location
from wellpredict.services.mapping import MarkerBoard, haversine_km
from wellpredict.services.soil_catalog import filter_catalog, load_catalog, suitability_band
from wellpredict.services.weather import (
    WeatherService, CurrentWeather, assess_weather_impact,
)


class TestGeolocation:
    def test_passthrough(self):
        loc = resolve_location(-33.8688, 151.2093, 12.0)
        assert loc.latitude == -33.8688
        assert loc.accuracy_m == 12.0
        assert not loc.is_fallback

    def test_missing_falls_back(self):
        loc = resolve_location(None, None)
        assert loc.is_fallback
        assert (loc.latitude, loc.longitude, loc.accuracy_m) == (40.7128, -74.006, 1000.0)

    def test_out_of_range_falls_back(self):
        assert resolve_location(120.0, 10.0).is_fallback


class TestWeather:
    def test_current_ranges(self):
        service = WeatherService(seed=7)
        weather = asyncio.run(service.get_current_weather(40.7, -74.0))
        assert 20 <= weather.temperature <= 35
        assert 40 <= weather.humidity <= 80
        assert 0 <= weather.wind_speed <= 10
        assert 1000 <= weather.pressure <= 1050
        assert weather.description == "Partly cloudy"

    def test_history_is_seven_days_ending_today(self):
        service = WeatherService(seed=7)
        days = asyncio.run(service.get_weather_history(40.7, -74.0))
        assert len(days) == 7
        dates = [d.date for d in days]
        assert dates == sorted(dates)
        assert all(0 <= d.rainfall <= 10 for d in days)

    def test_seeded_service_is_reproducible(self):
        a = asyncio.run(WeatherService(seed=1).get_current_weather(0, 0))
        b = asyncio.run(WeatherService(seed=1).get_current_weather(0, 0))
        assert a == b

    @pytest.mark.parametrize("temperature,humidity,impact,recommendation", [
        (31, 71, "High evaporation may lower water levels",
         "High humidity indicates good groundwater conditions"),
        (9, 29, "Cold weather may affect drilling operations",
         "Low humidity may indicate dry conditions"),
        (30, 70, "Optimal temperature for drilling operations",
         "Moderate humidity levels detected"),
    ])
    def test_impact_rules(self, temperature, humidity, impact, recommendation):
        weather = CurrentWeather(temperature=temperature, humidity=humidity,
                                 wind_speed=3, pressure=1013)
        result = assess_weather_impact(weather)
        assert result.impact == impact
        assert result.recommendation == recommendation

    def test_impact_without_data(self):
        assert assess_weather_impact(None).impact == "No data available"


class TestSoilCatalog:
    def test_full_catalog(self):
        assert len(load_catalog()) == 8

    def test_filter_by_kind(self):
        assert set(filter_catalog(kind="soil")["type"]) == {"soil"}
        assert len(filter_catalog(kind="rock")) == 5

    def test_search_matches_description(self):
        names = filter_catalog(search="POROUS")["name"].tolist()
        assert names == ["Limestone", "Sandstone"]

    def test_search_and_kind(self):
        assert filter_catalog(search="sand", kind="soil")["name"].tolist() == ["Sandy Soil", "Loamy Soil"]

    def test_no_results(self):
        assert filter_catalog(search="granite").empty

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            filter_catalog(kind="mineral")

    def test_suitability_band(self):
        assert suitability_band(80) == "high"
        assert suitability_band(79) == "medium"
        assert suitability_band(60) == "medium"
        assert suitability_band(59) == "low"


class TestMarkerBoard:
    def test_add_titles_sites_in_order(self):
        board = MarkerBoard()
        first = board.add(40.0, -74.0)
        second = board.add(41.0, -73.0)
        assert first.title == "Site 1"
        assert second.title == "Site 2"
        assert first.id != second.id
        assert first.type == "potential_site"

    def test_remove_and_clear(self):
        board = MarkerBoard()
        marker = board.add(40.0, -74.0)
        board.add(41.0, -73.0)
        assert board.remove(marker.id)
        assert not board.remove(marker.id)
        assert len(board.markers) == 1
        board.clear()
        assert board.markers == []

    def test_haversine_known_distance(self):
        # New York to London, roughly 5570 km
        assert haversine_km(40.7128, -74.006, 51.5074, -0.1278) == pytest.approx(5570, rel=0.01)

    def test_distances_from_origin(self):
        board = MarkerBoard()
        same = board.add(40.7128, -74.006)
        far = board.add(51.5074, -0.1278)
        distances = board.distances_from(resolve_location(None, None))
        assert distances[same.id] == 0.0
        assert distances[far.id] == pytest.approx(5570, rel=0.01)

    def test_distances_empty_board(self):
        assert MarkerBoard().distances_from(resolve_location(None, None)) == {}


class TestChat:
    @pytest.mark.parametrize("message,expected_start", [
        ("What is the water level here?", "Groundwater levels vary"),
        ("Is clay any good?", "Different soil types"),
        ("Tell me about limestone", "Rock formations"),
        ("How deep should I drill?", "Drilling depth recommendations"),
        ("Will it rain?", "Weather significantly"),
        ("Show me the map", "Location is crucial"),
        ("What is the price?", "Well drilling costs"),
        ("hello", "Hello! I'm here to help"),
    ])
    def test_keyword_rules(self, message, expected_start):
        assert ChatResponder.reply(message).startswith(expected_start)

    def test_first_rule_wins(self):
        assert ChatResponder.reply("groundwater in sandy soil").startswith("Groundwater levels vary")

    def test_fallback(self):
        assert ChatResponder.reply("qwerty") == FALLBACK_REPLY

    def test_blank_rejected(self):
        with pytest.raises(ValueError):
            ChatResponder.reply("   ")

    def test_transcript_is_bounded(self):
        responder = ChatResponder(max_messages=5)
        for _ in range(10):
            asyncio.run(responder.send("hello"))
        assert len(responder.transcript) == 5
        assert responder.transcript[-1].role == "bot"
        assert GREETING not in [m.content for m in responder.transcript]

    def test_ask_faq_unknown_index(self):
        with pytest.raises(IndexError):
            ChatResponder().ask_faq(len(FAQ))

    def test_transcript(self):
        responder = ChatResponder()
        assert responder.transcript[0].content == GREETING
        asyncio.run(responder.send("cost?"))
        responder.ask_faq(2)
        roles = [m.role for m in responder.transcript]
        assert roles == ["bot", "user", "bot", "user", "bot"]
        assert responder.transcript[-1].content == FAQ[2].answer
