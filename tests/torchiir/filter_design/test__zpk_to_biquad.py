"""Tests for zpk_to_biquad."""

import pytest
import torch

from torchiir.filter import Biquad
from torchiir.filter_design import (
    ComplexCoefficientError,
    FilterDesignError,
    make_zpk,
    zpk_to_biquad,
)


class TestZpkToBiquad:
    """Tests for zpk_to_biquad (one pole pair and zero pair to a biquad)."""

    def test_conjugate_pair(self) -> None:
        zpk = make_zpk([-1.0, -1.0], [0.5 + 0.5j, 0.5 - 0.5j], 2.0)

        section = zpk_to_biquad(zpk)

        assert isinstance(section, Biquad)
        torch.testing.assert_close(
            section.coefficients,
            torch.tensor([2.0, 4.0, 2.0, -1.0, 0.5], dtype=torch.float64),
        )

    def test_two_reals(self) -> None:
        zpk = make_zpk([0.2, -0.3], [0.1, 0.4], 1.0)

        section = zpk_to_biquad(zpk)

        torch.testing.assert_close(
            section.coefficients,
            torch.tensor([1.0, 0.1, -0.06, -0.5, 0.04], dtype=torch.float64),
        )

    def test_first_order_section(self) -> None:
        """A pole and a zero at the origin give a first-order section."""
        zpk = make_zpk([-1.0, 0.0], [0.25, 0.0], 0.5)

        section = zpk_to_biquad(zpk)

        torch.testing.assert_close(
            section.coefficients,
            torch.tensor([0.5, 0.5, 0.0, -0.25, 0.0], dtype=torch.float64),
        )

    def test_zero_gain(self) -> None:
        zpk = make_zpk([1j, -1j], [0.5, 0.5], 0.0)

        b0, b1, b2, a1, a2 = zpk_to_biquad(zpk).coefficients.tolist()

        assert (b0, b1, b2) == (0.0, 0.0, 0.0)
        assert (a1, a2) == pytest.approx((-1.0, 0.25))

    def test_fresh_state(self) -> None:
        zpk = make_zpk([0.0, 0.0], [0.0, 0.0], 1.0)

        section = zpk_to_biquad(zpk)

        assert torch.equal(section.state, torch.zeros(4, dtype=torch.float64))

    def test_non_conjugate_poles_raise(self) -> None:
        zpk = make_zpk([-1.0, -1.0], [0.5 + 0.5j, 0.5 + 0.5j], 1.0)

        with pytest.raises(ComplexCoefficientError, match="Denominator"):
            zpk_to_biquad(zpk)

    def test_non_conjugate_zeros_raise(self) -> None:
        zpk = make_zpk([1j, 0.5], [0.5, 0.5], 1.0)

        with pytest.raises(ComplexCoefficientError, match="Numerator"):
            zpk_to_biquad(zpk)

    def test_tolerance(self) -> None:
        """A slightly broken pair passes with a looser tolerance."""
        zpk = make_zpk([-1.0, -1.0], [0.5 + 0.5j, 0.5 - 0.5j + 1e-9j], 1.0)

        with pytest.raises(ComplexCoefficientError):
            zpk_to_biquad(zpk)

        section = zpk_to_biquad(zpk, tolerance=1e-6)
        assert section.coefficients[3].item() == pytest.approx(-1.0)

    @pytest.mark.parametrize(
        "zeros,poles", [([-1.0], [0.5, 0.5]), ([-1.0, -1.0], [0.5, 0.5, 0.5])]
    )
    def test_wrong_size_raises(self, zeros, poles) -> None:
        with pytest.raises(ValueError, match="exactly 2"):
            zpk_to_biquad(make_zpk(zeros, poles, 1.0))

    def test_error_hierarchy(self) -> None:
        assert issubclass(ComplexCoefficientError, FilterDesignError)
        assert issubclass(ComplexCoefficientError, ArithmeticError)
