"""
Tests for weather-driven hazard classification.
"""
import pytest

from app.models.report import IssueType
from app.models.weather import WeatherSnapshot, is_raining, neutral_weather
from app.services.hazard_classifier import classify


class TestRainHazard:

    @pytest.mark.parametrize("issue_type", ["pothole", "manhole", "water-leak"])
    def test_rain_amplified_types_become_critical(self, issue_type):
        result = classify(issue_type, {"condition": "rain"})
        assert result.is_rainy_hazard is True
        assert result.priority == "critical"

    @pytest.mark.parametrize("issue_type", ["waste", "streetlight"])
    def test_other_types_are_not_rain_hazards(self, issue_type):
        result = classify(issue_type, {"condition": "rain"})
        assert result.is_rainy_hazard is False
        assert result.priority == "medium"

    def test_drizzle_and_thunderstorm_count_as_rain(self):
        assert classify("pothole", WeatherSnapshot(condition="drizzle")).is_rainy_hazard
        assert classify("pothole", WeatherSnapshot(condition="thunderstorm")).is_rainy_hazard

    def test_precipitation_without_rain_condition(self):
        weather = WeatherSnapshot(condition="clouds", precipitation_mm=1.2)
        assert classify(IssueType.WATER_LEAK, weather).is_rainy_hazard is True

    def test_condition_is_case_insensitive_for_mappings(self):
        assert classify("pothole", {"condition": "Rain"}).is_rainy_hazard is True

    @pytest.mark.parametrize("weather", [
        WeatherSnapshot(condition="Thunderstorm"),
        {"condition": " DRIZZLE "},
        WeatherSnapshot(condition="clear", precipitation_mm=0.2),
    ])
    def test_rain_check_agrees_with_classifier(self, weather):
        assert is_raining(weather) is True
        assert classify("manhole", weather).is_rainy_hazard is True


class TestPriorityWithoutRain:

    def test_manhole_in_clear_weather_is_high(self):
        result = classify("manhole", {"condition": "clear"})
        assert result.is_rainy_hazard is False
        assert result.priority == "high"

    def test_pothole_in_clear_weather_is_medium(self):
        result = classify(IssueType.POTHOLE, WeatherSnapshot(condition="clear", precipitation_mm=0))
        assert result.priority == "medium"

    def test_neutral_fallback_never_flags_hazard(self):
        result = classify("pothole", neutral_weather())
        assert result.is_rainy_hazard is False
        assert result.priority == "medium"


class TestTotality:

    @pytest.mark.parametrize("weather", [None, {}, {"condition": None}, {"precipitation_mm": "n/a"}, object()])
    def test_malformed_weather_does_not_raise(self, weather):
        result = classify("manhole", weather)
        assert result.is_rainy_hazard is False
        assert result.priority == "high"

    @pytest.mark.parametrize("issue_type", [None, "bridge", 42])
    def test_unknown_issue_type_falls_back_to_medium(self, issue_type):
        result = classify(issue_type, {"condition": "rain"})
        assert result.is_rainy_hazard is False
        assert result.priority == "medium"
