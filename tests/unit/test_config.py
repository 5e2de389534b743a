"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from svgextruder.config import (
    DetailConfig,
    ExtruderSettings,
    FlattenConfig,
    ProcessingConfig,
    get_default_settings,
)


class TestExtruderSettings:
    """Tests for the settings models."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = get_default_settings()
        assert settings.flatten.default_resolution == 64
        assert settings.detail.curve_weight == 10
        assert settings.detail.resolution_ceiling == 512
        assert settings.detail.default_vertex_budget == 200_000
        assert settings.processing.max_workers is None
        assert settings.processing.build_ladders is True
        assert settings.logging.log_file is None

    def test_round_trip_through_dict(self) -> None:
        """Test settings rebuild from model_dump, as worker processes do."""
        settings = ExtruderSettings(
            flatten=FlattenConfig(default_resolution=16),
            processing=ProcessingConfig(max_workers=2, build_ladders=False),
        )
        assert ExtruderSettings.model_validate(settings.model_dump()) == settings

    @pytest.mark.parametrize("resolution", [0, 5000])
    def test_resolution_bounds(self, resolution: int) -> None:
        """Test out-of-range flatten resolution is rejected."""
        with pytest.raises(ValidationError):
            FlattenConfig(default_resolution=resolution)

    def test_min_above_max_rejected(self) -> None:
        """Test inverted ranges are rejected."""
        with pytest.raises(ValidationError):
            DetailConfig(min_resolution=200)
        with pytest.raises(ValidationError):
            DetailConfig(min_depth_steps=5)

    def test_max_resolution_below_ceiling(self) -> None:
        """Test the per-rung ceiling bounds the base resolution."""
        with pytest.raises(ValidationError):
            DetailConfig(max_resolution=1024)
        assert DetailConfig(max_resolution=1024, resolution_ceiling=2048).max_resolution == 1024
