"""Tests for frequency transform functions."""

import math

import pytest
import torch
from scipy import signal as scipy_signal

from torchiir.filter_design import (
    butterworth_prototype,
    lowpass_to_bandpass_zpk,
    lowpass_to_bandstop_zpk,
    lowpass_to_highpass_zpk,
    lowpass_to_lowpass_zpk,
    make_zpk,
)


def _assert_same_roots(actual: torch.Tensor, expected) -> None:
    """Compare two sets of roots irrespective of their order."""
    actual_sorted = sorted(actual.numpy(), key=lambda x: (x.real, x.imag))
    expected_sorted = sorted(expected, key=lambda x: (x.real, x.imag))

    assert len(actual_sorted) == len(expected_sorted)
    for a, e in zip(actual_sorted, expected_sorted):
        assert abs(a - e) < 1e-9 * max(1.0, abs(e)), f"{a} vs {e}"


class TestLowpassToLowpassZpk:
    """Tests for lowpass_to_lowpass_zpk (lowpass to lowpass frequency scaling)."""

    def test_identity_transform(self) -> None:
        """cutoff_frequency=1.0 should not change the filter."""
        zpk = butterworth_prototype(4)
        result = lowpass_to_lowpass_zpk(zpk, cutoff_frequency=1.0)

        torch.testing.assert_close(result.poles, zpk.poles)
        torch.testing.assert_close(result.gain, zpk.gain)

    def test_frequency_scaling(self) -> None:
        """Poles should scale by cutoff_frequency, gain by its power."""
        zpk = butterworth_prototype(4)
        result = lowpass_to_lowpass_zpk(zpk, cutoff_frequency=2.0)

        torch.testing.assert_close(result.poles, zpk.poles * 2.0)
        assert result.gain.item() == pytest.approx(2.0**4)

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 5])
    @pytest.mark.parametrize("cutoff_frequency", [0.5, 1.0, 2.0, 10.0])
    def test_matches_scipy(self, order: int, cutoff_frequency: float) -> None:
        """Should match scipy.signal.lp2lp_zpk."""
        zpk = butterworth_prototype(order)
        result = lowpass_to_lowpass_zpk(zpk, cutoff_frequency)

        z_sp, p_sp, k_sp = scipy_signal.lp2lp_zpk(
            zpk.zeros.numpy(), zpk.poles.numpy(), zpk.gain.item(),
            wo=cutoff_frequency,
        )

        _assert_same_roots(result.zeros, z_sp)
        _assert_same_roots(result.poles, p_sp)
        assert result.gain.item() == pytest.approx(k_sp, rel=1e-12)

    def test_with_zeros(self) -> None:
        """Zeros are scaled too and the degree counts them."""
        zpk = make_zpk([-3.0], [-1.0, -2.0], 1.0)
        result = lowpass_to_lowpass_zpk(zpk, cutoff_frequency=10.0)

        torch.testing.assert_close(
            result.zeros, torch.tensor([-30.0], dtype=torch.complex128)
        )
        assert result.gain.item() == pytest.approx(10.0)


class TestLowpassToHighpassZpk:
    """Tests for lowpass_to_highpass_zpk."""

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 5])
    @pytest.mark.parametrize("cutoff_frequency", [0.5, 1.0, 2.0, 10.0])
    def test_matches_scipy(self, order: int, cutoff_frequency: float) -> None:
        """Should match scipy.signal.lp2hp_zpk."""
        zpk = butterworth_prototype(order)
        result = lowpass_to_highpass_zpk(zpk, cutoff_frequency)

        z_sp, p_sp, k_sp = scipy_signal.lp2hp_zpk(
            zpk.zeros.numpy(), zpk.poles.numpy(), zpk.gain.item(),
            wo=cutoff_frequency,
        )

        _assert_same_roots(result.zeros, z_sp)
        _assert_same_roots(result.poles, p_sp)
        assert result.gain.item() == pytest.approx(k_sp, rel=1e-12)

    def test_zeros_at_origin(self) -> None:
        """Zeros at infinity move to the origin."""
        zpk = butterworth_prototype(3)
        result = lowpass_to_highpass_zpk(zpk, cutoff_frequency=5.0)

        assert result.zeros.numel() == 3
        assert (result.zeros == 0).all()

    def test_inverts_poles(self) -> None:
        zpk = make_zpk([], [-2.0], 1.0)
        result = lowpass_to_highpass_zpk(zpk, cutoff_frequency=4.0)

        assert complex(result.poles[0]) == pytest.approx(-2.0)
        # real(prod(-zeros) / prod(-poles)) = 1 / 2
        assert result.gain.item() == pytest.approx(0.5)


class TestLowpassToBandpassZpk:
    """Tests for lowpass_to_bandpass_zpk."""

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 5])
    @pytest.mark.parametrize(
        "center_frequency,bandwidth", [(1.0, 0.5), (10.0, 2.0), (3.0, 8.0)]
    )
    def test_matches_scipy(
        self, order: int, center_frequency: float, bandwidth: float
    ) -> None:
        """Should match scipy.signal.lp2bp_zpk."""
        zpk = butterworth_prototype(order)
        result = lowpass_to_bandpass_zpk(zpk, center_frequency, bandwidth)

        z_sp, p_sp, k_sp = scipy_signal.lp2bp_zpk(
            zpk.zeros.numpy(), zpk.poles.numpy(), zpk.gain.item(),
            wo=center_frequency, bw=bandwidth,
        )

        _assert_same_roots(result.zeros, z_sp)
        _assert_same_roots(result.poles, p_sp)
        assert result.gain.item() == pytest.approx(k_sp, rel=1e-12)

    @pytest.mark.parametrize("order", [1, 2, 3, 4])
    def test_doubles_order(self, order: int) -> None:
        """Each pole becomes two, degree zeros are added at the origin."""
        zpk = butterworth_prototype(order)
        result = lowpass_to_bandpass_zpk(zpk, 2.0, 1.0)

        assert result.poles.numel() == 2 * order
        assert result.zeros.numel() == order
        assert (result.zeros == 0).all()
        assert result.gain.item() == pytest.approx(1.0**order)

    def test_poles_conjugate_symmetric(self) -> None:
        """Transformed poles still come in conjugate pairs."""
        zpk = butterworth_prototype(3)
        result = lowpass_to_bandpass_zpk(zpk, 2.0 * math.pi * 100, 50.0)

        poles = sorted(result.poles.tolist(), key=lambda x: (x.real, x.imag))
        conjugates = sorted(
            (p.conjugate() for p in result.poles.tolist()),
            key=lambda x: (x.real, x.imag),
        )
        for p, c in zip(poles, conjugates):
            assert abs(p - c) < 1e-9


class TestLowpassToBandstopZpk:
    """Tests for lowpass_to_bandstop_zpk."""

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 5])
    @pytest.mark.parametrize(
        "center_frequency,bandwidth", [(1.0, 0.5), (10.0, 2.0), (3.0, 8.0)]
    )
    def test_matches_scipy(
        self, order: int, center_frequency: float, bandwidth: float
    ) -> None:
        """Should match scipy.signal.lp2bs_zpk."""
        zpk = butterworth_prototype(order)
        result = lowpass_to_bandstop_zpk(zpk, center_frequency, bandwidth)

        z_sp, p_sp, k_sp = scipy_signal.lp2bs_zpk(
            zpk.zeros.numpy(), zpk.poles.numpy(), zpk.gain.item(),
            wo=center_frequency, bw=bandwidth,
        )

        _assert_same_roots(result.zeros, z_sp)
        _assert_same_roots(result.poles, p_sp)
        assert result.gain.item() == pytest.approx(k_sp, rel=1e-12)

    def test_zeros_at_stopband_center(self) -> None:
        """Zeros at infinity move to +/- j * center_frequency."""
        zpk = butterworth_prototype(2)
        result = lowpass_to_bandstop_zpk(zpk, 3.0, 1.0)

        expected = torch.tensor(
            [3j, 3j, -3j, -3j], dtype=torch.complex128
        )
        torch.testing.assert_close(result.zeros, expected)


class TestTransformsDoNotMutate:
    """Every transform returns a new ZPK and leaves its input alone."""

    @pytest.mark.parametrize(
        "transform,args",
        [
            (lowpass_to_lowpass_zpk, (2.0,)),
            (lowpass_to_highpass_zpk, (2.0,)),
            (lowpass_to_bandpass_zpk, (2.0, 1.0)),
            (lowpass_to_bandstop_zpk, (2.0, 1.0)),
        ],
    )
    def test_input_unchanged(self, transform, args) -> None:
        zpk = butterworth_prototype(3)
        poles = zpk.poles.clone()
        gain = zpk.gain.clone()

        result = transform(zpk, *args)

        assert result is not zpk
        assert torch.equal(zpk.poles, poles)
        assert torch.equal(zpk.gain, gain)
        assert zpk.zeros.numel() == 0


def _assert_exact_conjugates(values: torch.Tensor) -> None:
    """Every value has its conjugate in the set, bit for bit."""
    conjugates = values.conj().resolve_conj()
    matches = values.unsqueeze(1) == conjugates.unsqueeze(0)
    assert bool(matches.any(dim=1).all()), values


def _prewarped(low: float, high: float):
    """Center and width of prewarped band edges at sampling frequency 2."""
    w_low = 4 * math.tan(math.pi * low / 2)
    w_high = 4 * math.tan(math.pi * high / 2)
    return math.sqrt(w_low * w_high), w_high - w_low


class TestTransformsKeepConjugatePairs:
    """Conjugate pairs map to exact conjugate pairs, also for wide bands."""

    @pytest.mark.parametrize(
        "order,edges",
        [
            (6, (0.02, 0.999)),
            (6, (0.001, 0.999)),
            (7, (0.005, 0.999)),
            (4, (0.2, 0.4)),
        ],
    )
    @pytest.mark.parametrize(
        "transform", [lowpass_to_bandpass_zpk, lowpass_to_bandstop_zpk]
    )
    def test_band_transforms(self, transform, order: int, edges) -> None:
        center_frequency, bandwidth = _prewarped(*edges)

        result = transform(
            butterworth_prototype(order), center_frequency, bandwidth
        )

        _assert_exact_conjugates(result.poles)
        _assert_exact_conjugates(result.zeros)

    @pytest.mark.parametrize("order", [5, 6, 7, 8])
    @pytest.mark.parametrize(
        "transform", [lowpass_to_lowpass_zpk, lowpass_to_highpass_zpk]
    )
    def test_cutoff_transforms(self, transform, order: int) -> None:
        result = transform(butterworth_prototype(order), 2546.0)

        _assert_exact_conjugates(result.poles)
        _assert_exact_conjugates(result.zeros)
