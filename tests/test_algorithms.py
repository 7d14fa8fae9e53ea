"""Tests for kernel tables and the algorithm registry."""

import numpy as np
import pytest

from ditherer.core.algorithms import (
    ALGORITHMS,
    ATKINSON_KERNEL,
    FLOYD_STEINBERG_KERNEL,
    AlgorithmName,
    get_algorithm,
    threshold_quantize,
)
from ditherer.core.errors import UnsupportedAlgorithmError


class TestKernels:
    def test_floyd_steinberg_taps(self):
        taps = [(t.dx, t.dy, t.weight * 16) for t in FLOYD_STEINBERG_KERNEL.taps]
        assert taps == [(1, 0, 7), (-1, 1, 3), (0, 1, 5), (1, 1, 1)]

    def test_floyd_steinberg_sums_to_one(self):
        assert FLOYD_STEINBERG_KERNEL.total_weight == 1.0

    def test_atkinson_taps(self):
        offsets = [(t.dx, t.dy) for t in ATKINSON_KERNEL.taps]
        assert offsets == [(1, 0), (2, 0), (-1, 1), (0, 1), (1, 1), (0, 2)]
        assert all(t.weight == 1 / 8 for t in ATKINSON_KERNEL.taps)

    def test_atkinson_diffuses_six_eighths(self):
        # The missing 2/8 is what gives Atkinson its contrast
        assert ATKINSON_KERNEL.total_weight == pytest.approx(6 / 8)

    @pytest.mark.parametrize("kernel", [FLOYD_STEINBERG_KERNEL, ATKINSON_KERNEL])
    def test_taps_point_forward(self, kernel):
        for tap in kernel.taps:
            assert tap.dy > 0 or (tap.dy == 0 and tap.dx > 0)


class TestQuantize:
    def test_threshold(self):
        values = [0.0, 127.5, 127.6, 255.0, -40.0, 300.0]
        assert [threshold_quantize(v, 255.0) for v in values] == [
            0.0, 0.0, 255.0, 255.0, 0.0, 255.0,
        ]

    def test_unit_scale(self):
        assert threshold_quantize(0.49, 1.0) == 0.0
        assert threshold_quantize(0.51, 1.0) == 1.0


class TestKernelArrays:
    def test_floyd_steinberg_arrays(self):
        dxs, dys, weights = FLOYD_STEINBERG_KERNEL.as_arrays()
        assert dxs.tolist() == [1, -1, 0, 1]
        assert dys.tolist() == [0, 1, 1, 1]
        assert (weights * 16).tolist() == [7.0, 3.0, 5.0, 1.0]
        assert dxs.dtype == np.int64
        assert weights.dtype == np.float64

    def test_atkinson_arrays(self):
        dxs, dys, weights = ATKINSON_KERNEL.as_arrays()
        assert len(dxs) == len(dys) == len(weights) == 6
        assert weights.sum() == pytest.approx(6 / 8)


class TestRegistry:
    def test_every_name_registered(self):
        for name in AlgorithmName:
            assert ALGORITHMS[name].name == name

    def test_lookup_by_value(self):
        assert get_algorithm("floyd") is ALGORITHMS[AlgorithmName.FLOYD_STEINBERG]
        assert get_algorithm(AlgorithmName.ATKINSON).kernel is ATKINSON_KERNEL

    @pytest.mark.parametrize("name", ["bayer", "", "FLOYD", 3])
    def test_unknown_rejected(self, name):
        with pytest.raises(UnsupportedAlgorithmError):
            get_algorithm(name)

    def test_unsupported_is_value_error(self):
        with pytest.raises(ValueError):
            get_algorithm("sierra")
