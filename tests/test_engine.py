"""Unit tests for the scoring engine."""

import itertools

import pytest

from wellpredict.prediction.engine import (
    score, recommend, depth_factor, water_level_for, yield_for,
    round_half_up, next_result_id,
)
from wellpredict.prediction.schemas import PredictionRequest


def make_request(soil="clay", rock="sedimentary", depth=60, lat=40.7128, lon=-74.006):
    return PredictionRequest(soil_type=soil, rock_type=rock, depth=depth,
                             latitude=lat, longitude=lon)


class TestScore:
    def test_end_to_end_clay_sedimentary(self, clay_request):
        result = score(clay_request)
        assert result.confidence == 83
        assert result.water_level == 40
        assert result.estimated_yield == 60
        assert result.recommendation == "Excellent location for drilling"
        assert result.best_time == "Early monsoon season (June-July)"
        assert result.location.latitude == 40.7128
        assert result.location.longitude == -74.006

    def test_chart_data_order(self, clay_request):
        result = score(clay_request)
        assert [(p.label, p.value) for p in result.chart_data] == [
            ("Soil Quality", 80),
            ("Rock Formation", 90),
            ("Depth Factor", 80),
            ("Overall Score", 83),
        ]

    def test_low_end(self):
        result = score(make_request(soil="rocky", rock="igneous", depth=20))
        assert result.confidence == 40
        assert result.water_level == 6
        assert result.estimated_yield == 9
        assert result.recommendation == "Poor location, consider alternative sites"

    def test_exactly_seventy_is_not_excellent(self):
        result = score(make_request(soil="loamy", rock="metamorphic", depth=60))
        assert result.confidence == 70
        assert result.recommendation == "Good potential, proceed with caution"
        assert result.water_level == 34
        assert result.estimated_yield == 51

    def test_exactly_fifty_is_poor(self):
        result = score(make_request(soil="sandy", rock="igneous", depth=40))
        assert result.confidence == 50
        assert result.recommendation == "Poor location, consider alternative sites"

    def test_deterministic_apart_from_id_and_time(self, clay_request):
        a = score(clay_request)
        b = score(clay_request)
        fields = {"confidence", "water_level", "estimated_yield", "recommendation",
                  "chart_data", "best_time", "location"}
        assert a.model_dump(include=fields) == b.model_dump(include=fields)
        assert a.id != b.id

    def test_unknown_categories_default(self):
        request = PredictionRequest.model_construct(
            soil_type="peat", rock_type="obsidian", depth=60,
            latitude=0.0, longitude=0.0,
        )
        result = score(request)
        assert result.chart_data[0].value == 50
        assert result.chart_data[1].value == 50
        assert result.confidence == 60

    def test_confidence_range(self):
        soils = ["clay", "sandy", "loamy", "rocky"]
        rocks = ["sedimentary", "igneous", "metamorphic"]
        depths = [10, 30, 31, 50, 51, 200]
        for soil, rock, depth in itertools.product(soils, rocks, depths):
            result = score(make_request(soil=soil, rock=rock, depth=depth))
            assert 30 <= result.confidence <= 90
            assert result.water_level == water_level_for(depth, result.confidence)
            assert result.estimated_yield == yield_for(result.water_level)


class TestFactors:
    @pytest.mark.parametrize("depth,expected", [
        (10, 0.4), (30, 0.4), (31, 0.6), (50, 0.6), (51, 0.8), (200, 0.8),
    ])
    def test_depth_factor_boundaries(self, depth, expected):
        assert depth_factor(depth) == expected

    @pytest.mark.parametrize("confidence,expected", [
        (71, "Excellent location for drilling"),
        (70, "Good potential, proceed with caution"),
        (51, "Good potential, proceed with caution"),
        (50, "Poor location, consider alternative sites"),
        (30, "Poor location, consider alternative sites"),
    ])
    def test_recommendation_thresholds(self, confidence, expected):
        assert recommend(confidence) == expected


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(64.5) == 65
        assert round_half_up(39.84) == 40

    def test_yield_half_up(self):
        # 43 * 1.5 = 64.5; banker's rounding would give 64
        assert yield_for(43) == 65

    def test_water_level_formula(self):
        assert water_level_for(60, 83) == 40
        assert water_level_for(200, 90) == 144
        assert water_level_for(10, 30) == 2


class TestIds:
    def test_ids_strictly_increase(self):
        ids = [next_result_id() for _ in range(1000)]
        assert ids == sorted(set(ids))
