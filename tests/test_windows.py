"""
Tests for the window generators.

Reference windows come from numpy and scipy.signal.windows.
"""

import numpy as np
import pytest
from scipy.signal import windows as scipy_windows

from dsp.windows import (
    GENERATORS,
    SELECTORS,
    WindowFamily,
    apply_window,
    available_windows,
    chebyshev_polynomial,
    chebyshev_window,
    flattop_window,
    generate,
    hamming_window,
    hann_window,
    tukey_window,
)

MIRRORED = [flattop_window, hann_window, hamming_window]
ALL_GENERATORS = [tukey_window, flattop_window, hann_window, hamming_window, chebyshev_window]


class TestSymmetry:
    """Every window reads the same forwards and backwards."""

    @pytest.mark.parametrize("generator", ALL_GENERATORS)
    def test_symmetric_small_lengths(self, generator):
        for n in range(2, 200):
            w = generator(n)
            assert len(w) == n
            np.testing.assert_array_equal(w, w[::-1])

    @pytest.mark.parametrize("generator", MIRRORED + [tukey_window])
    @pytest.mark.parametrize("n", [1023, 1024, 2047, 2048, 4001])
    def test_symmetric_large_lengths(self, generator, n):
        w = generator(n)
        np.testing.assert_array_equal(w, w[::-1])

    @pytest.mark.parametrize("generator", ALL_GENERATORS)
    def test_length_one(self, generator):
        w = generator(1)
        assert len(w) == 1
        assert np.isfinite(w[0])

    @pytest.mark.parametrize("generator", ALL_GENERATORS)
    def test_invalid_length(self, generator):
        with pytest.raises(ValueError):
            generator(0)


class TestOddMidpoint:
    """The odd-length midpoint comes from the closed form only."""

    def test_hamming_midpoint_is_peak(self):
        w = hamming_window(9)
        assert w[4] == pytest.approx(1.0)
        assert w[3] == w[5]
        assert w[3] < w[4]

    def test_hann_midpoint_formula(self):
        n = 7
        w = hann_window(n)
        mid = n // 2
        assert w[mid] == pytest.approx(0.5 * (1 - np.cos(2 * np.pi * (mid + 1) / (n + 1))))
        assert w[mid] == pytest.approx(1.0)

    def test_flattop_midpoint_formula(self):
        w = flattop_window(11)
        assert w[5] == pytest.approx(1.0, abs=1e-6)
        # Only the midpoint holds the maximum
        assert np.sum(w == w.max()) == 1


class TestReferenceWindows:
    """Closed forms agree with the library implementations."""

    @pytest.mark.parametrize("n", [2, 3, 8, 9, 100, 101])
    def test_hamming_matches_numpy(self, n):
        np.testing.assert_allclose(hamming_window(n), np.hamming(n), atol=1e-12)

    @pytest.mark.parametrize("n", [2, 3, 8, 9, 100, 101])
    def test_flattop_matches_scipy(self, n):
        np.testing.assert_allclose(flattop_window(n), scipy_windows.flattop(n, sym=True), atol=1e-12)

    @pytest.mark.parametrize("n", [1, 2, 3, 8, 9, 100, 101])
    def test_hann_is_interior_of_numpy_hanning(self, n):
        np.testing.assert_allclose(hann_window(n), np.hanning(n + 2)[1:-1], atol=1e-12)

    @pytest.mark.parametrize("n", [3, 8, 9, 100, 101])
    def test_tukey_matches_scipy(self, n):
        # alpha here is the untapered fraction; scipy's is the tapered one
        np.testing.assert_allclose(tukey_window(n, 0.65), scipy_windows.tukey(n, 0.35), atol=1e-12)

    def test_hann_never_zero(self):
        w = hann_window(16)
        assert np.all(w > 0)

    def test_tukey_flat_center(self):
        w = tukey_window(101)
        # |i - 50| < 0.65 * 50 is untapered
        np.testing.assert_array_equal(w[18:83], np.ones(65))
        assert w[0] == pytest.approx(0.0)
        assert w[10] < 1.0

    def test_tukey_two_samples(self):
        w = tukey_window(2)
        assert np.all(np.isfinite(w))
        assert w[0] == w[1]


class TestChebyshev:
    """Dolph-Chebyshev window and polynomial."""

    def test_polynomial_inside_unit_interval(self):
        # T_2(x) = 2x^2 - 1
        assert chebyshev_polynomial(2, 0.5) == pytest.approx(-0.5)
        assert chebyshev_polynomial(3, 1.0) == pytest.approx(1.0)

    def test_polynomial_outside_unit_interval(self):
        # T_3(x) = 4x^3 - 3x
        assert chebyshev_polynomial(3, 2.0) == pytest.approx(26.0)
        assert chebyshev_polynomial(3, -2.0) == pytest.approx(-26.0)

    def test_polynomial_vector(self):
        x = np.array([0.0, 0.5, 1.5])
        np.testing.assert_allclose(chebyshev_polynomial(2, x), 2 * x ** 2 - 1)

    @pytest.mark.parametrize("n", [2, 7, 8, 31, 64])
    def test_peak_normalized(self, n):
        w = chebyshev_window(n, 60.0)
        assert w.max() == pytest.approx(1.0)
        assert np.all(np.isfinite(w))

    @pytest.mark.parametrize("n", [7, 31, 33])
    def test_matches_scipy_odd_lengths(self, n):
        np.testing.assert_allclose(chebyshev_window(n, 60.0), scipy_windows.chebwin(n, 60.0), atol=1e-9)


class TestFamilies:
    """Family selection and dispatch."""

    def test_selectors(self):
        assert WindowFamily.from_selector('n') is WindowFamily.NONE
        assert WindowFamily.from_selector('t') is WindowFamily.TUKEY
        assert WindowFamily.from_selector('f') is WindowFamily.FLAT_TOP
        assert WindowFamily.from_selector('h') is WindowFamily.HANN
        assert WindowFamily.from_selector('m') is WindowFamily.HAMMING

    def test_unknown_selector_is_none(self, caplog):
        assert WindowFamily.from_selector('x') is WindowFamily.NONE
        assert "Unknown window selector" in caplog.text

    def test_enum_passes_through(self):
        assert WindowFamily.from_selector(WindowFamily.HANN) is WindowFamily.HANN

    def test_chebyshev_has_no_selector(self):
        assert WindowFamily.DOLPH_CHEBYSHEV.selector is None
        assert WindowFamily.DOLPH_CHEBYSHEV not in SELECTORS.values()
        assert WindowFamily.HAMMING.selector == 'm'

    def test_generator_table(self):
        assert WindowFamily.NONE not in GENERATORS
        assert GENERATORS[WindowFamily.HANN] is hann_window
        with pytest.raises(TypeError):
            GENERATORS[WindowFamily.NONE] = hann_window

    def test_generate_dispatch(self):
        np.testing.assert_array_equal(generate('m', 16), hamming_window(16))
        np.testing.assert_array_equal(generate(WindowFamily.TUKEY, 16, alpha=0.5), tukey_window(16, 0.5))
        assert generate('n', 16) is None

    def test_available_windows(self):
        assert available_windows() == {
            'n': 'none', 't': 'tukey', 'f': 'flat-top', 'h': 'hann', 'm': 'hamming',
        }


class TestApplyWindow:
    """Multiplying blocks by windows."""

    def test_mono(self):
        samples = np.ones(8)
        w = hann_window(8)
        np.testing.assert_array_equal(apply_window(samples, w), w)

    def test_stereo(self):
        samples = np.ones((8, 2))
        w = hamming_window(8)
        out = apply_window(samples, w)
        assert out.shape == (8, 2)
        np.testing.assert_array_equal(out[:, 0], w)
        np.testing.assert_array_equal(out[:, 1], w)

    def test_no_window(self):
        samples = np.arange(5.0)
        assert apply_window(samples, None) is samples

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            apply_window(np.ones(10), hann_window(8))
