"""Tests for feature and color mapping."""

import math

import numpy as np
import pytest

from loop_cppn import RenderConfig
from loop_cppn.features import ColorMode, FeatureMode, feature_grid, phase_features, to_pixels


class TestPhaseFeatures:
    @pytest.mark.parametrize("num_frames,cycles", [(60, 1), (12, 1), (60, 3), (7, 2)])
    def test_periodic_over_one_loop(self, num_frames, cycles):
        config = RenderConfig(num_frames=num_frames, phase_cycles=cycles)
        first = phase_features(0, config.phase_scale)
        wrapped = phase_features(num_frames, config.phase_scale)
        assert first == (1.0, 0.0)
        assert wrapped[0] == pytest.approx(first[0], abs=1e-12)
        assert wrapped[1] == pytest.approx(first[1], abs=1e-12)

    def test_samples_are_distinct_within_loop(self):
        config = RenderConfig(num_frames=60)
        samples = {tuple(round(v, 9) for v in phase_features(t, config.phase_scale)) for t in range(60)}
        assert len(samples) == 60

    def test_on_unit_circle(self):
        z1, z2 = phase_features(17, 0.3)
        assert z1 == math.cos(17 * 0.3)
        assert z2 == math.sin(17 * 0.3)


class TestFeatureGrid:
    def test_plain_values(self):
        config = RenderConfig(width=10, height=8, sharpness=0.5, focus=2.0, num_frames=4)
        grid = np.asarray(feature_grid(config, 1, 0, 10, 0, 8))
        assert grid.shape == (8, 10, 5)
        x, y = 3, 6
        np.testing.assert_allclose(
            grid[y, x],
            [x * 0.5, y * 0.5, math.hypot(x - 5, y - 4) * 0.5 * 2.0, math.cos(math.pi / 2), math.sin(math.pi / 2)],
            rtol=1e-12,
            atol=1e-15,
        )

    def test_pattern_values(self):
        config = RenderConfig(width=10, height=8, sharpness=0.5, pattern=True, density=0.3)
        assert config.feature_mode is FeatureMode.PATTERN
        grid = np.asarray(feature_grid(config, 0, 0, 10, 0, 8))
        x, y = 7, 2
        np.testing.assert_allclose(grid[y, x, 0], math.sin(x * 0.3) * 0.5, rtol=1e-12)
        np.testing.assert_allclose(grid[y, x, 1], math.cos(y * 0.3) * 0.5, rtol=1e-12)

    def test_radius_zero_at_integer_centre(self):
        config = RenderConfig(width=9, height=7)
        grid = np.asarray(feature_grid(config, 0, 0, 9, 0, 7))
        assert grid[3, 4, 2] == 0.0

    def test_region_matches_slice_of_full_grid(self):
        config = RenderConfig(width=20, height=16, pattern=True, density=2.0)
        full = np.asarray(feature_grid(config, 5, 0, 20, 0, 16))
        part = np.asarray(feature_grid(config, 5, 7, 13, 3, 11))
        np.testing.assert_allclose(part, full[3:11, 7:13], rtol=1e-12, atol=1e-15)


class TestToPixels:
    def test_gray_truncates(self):
        out = np.array([[0.0], [0.5], [0.999], [1.0]])
        np.testing.assert_array_equal(np.asarray(to_pixels(out, ColorMode.GRAY)), [0, 127, 254, 255])

    def test_color_channels(self):
        out = np.array([[0.1, 0.2, 0.3]])
        pixels = np.asarray(to_pixels(out, ColorMode.COLOR))
        assert pixels.dtype == np.uint8
        np.testing.assert_array_equal(pixels, [[25, 51, 76]])

    def test_clamped(self):
        out = np.array([[-0.5, 1.5, 0.25]])
        np.testing.assert_array_equal(np.asarray(to_pixels(out, ColorMode.COLOR)), [[0, 255, 63]])

    def test_channels(self):
        assert ColorMode.GRAY.channels == 1
        assert ColorMode.COLOR.channels == 3
