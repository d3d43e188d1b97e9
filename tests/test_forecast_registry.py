"""
Tests for the forecast model registry.
"""

from __future__ import annotations

import pytest

from engine.enums import ModelType
from engine.forecast import ModelRegistry, UnknownModelTypeError, get_registry
from engine.forecast.models import LinearModel, MovingAverageModel, TrendModel
from engine.forecast.params import MovingAverageParams


def test_default_registry_lists_all_models_in_order():
    assert get_registry().available() == ["linear", "exponential", "moving_average", "trend"]


def test_resolve_accepts_enum_and_mixed_case():
    registry = get_registry()
    assert isinstance(registry.resolve(ModelType.trend), TrendModel)
    assert isinstance(registry.resolve("Moving_Average"), MovingAverageModel)
    assert "LINEAR" in registry
    assert "arima" not in registry


def test_resolve_unknown_raises():
    with pytest.raises(UnknownModelTypeError) as exc_info:
        get_registry().resolve("prophet")
    assert exc_info.value.model_type == "prophet"


def test_describe_reports_parameters():
    info = get_registry().describe("moving_average")
    assert info.model_type == "moving_average"
    assert info.description == "Moving average model"
    assert info.parameters == {"windowSize": "Number of periods for moving average"}

    linear = get_registry().describe("linear")
    assert linear.description == "Linear regression model"
    assert linear.parameters == {}


def test_parse_params_delegates_to_model():
    params = get_registry().parse_params("moving_average", {"windowSize": "5"})
    assert params == MovingAverageParams(window_size=5)


def test_register_rejects_duplicates_and_non_models():
    registry = ModelRegistry([LinearModel()])
    with pytest.raises(ValueError):
        registry.register(LinearModel())
    with pytest.raises(TypeError):
        registry.register(object())  # type: ignore[arg-type]


def test_custom_registry_is_independent():
    registry = ModelRegistry([TrendModel()])
    assert registry.available() == ["trend"]
    assert get_registry().available() != registry.available()
