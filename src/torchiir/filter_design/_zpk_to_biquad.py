"""Conversion of one pole pair and one zero pair to a biquad section."""

from typing import Optional

import torch

from torchiir.filter._biquad import Biquad

from ._complex_pair import is_real
from ._exceptions import ComplexCoefficientError
from ._zpk import ZPK


def zpk_to_biquad(zpk: ZPK, *, tolerance: Optional[float] = None) -> Biquad:
    """
    Convert two zeros, two poles and a gain to a second-order section.

    Parameters
    ----------
    zpk : ZPK
        Exactly two zeros and two poles, each either a conjugate pair or two
        real values. Use zeros/poles at the origin for first-order sections.
    tolerance : float, optional
        Largest imaginary part accepted on an expanded coefficient.
        Defaults to ``REAL_TOLERANCE``.

    Returns
    -------
    Biquad
        Section with

        .. math::
            b = k [1, -(z_0 + z_1), z_0 z_1], \\quad
            a = [1, -(p_0 + p_1), p_0 p_1]

    Raises
    ------
    ValueError
        If ``zpk`` does not hold exactly two zeros and two poles.
    ComplexCoefficientError
        If a coefficient has a non-negligible imaginary part, which means
        the zeros or poles were not paired with their conjugates.
    """
    if zpk.zeros.numel() != 2 or zpk.poles.numel() != 2:
        raise ValueError(
            "A second-order section needs exactly 2 zeros and 2 poles, got "
            f"{zpk.zeros.numel()} zeros and {zpk.poles.numel()} poles"
        )

    z0, z1 = zpk.zeros.unbind()
    p0, p1 = zpk.poles.unbind()
    one = torch.ones((), dtype=torch.complex128)

    a = torch.stack([one, -p0 - p1, p0 * p1])
    b = zpk.gain * torch.stack([one, -z0 - z1, z0 * z1])

    # Conjugate pairs (or pairs of reals) expand to real polynomials
    for name, coefficients in (("Denominator", a), ("Numerator", b)):
        if not bool(is_real(coefficients, tolerance=tolerance).all()):
            raise ComplexCoefficientError(
                f"{name} coefficients are complex: {coefficients.tolist()}"
            )

    b0, b1, b2 = b.real.tolist()
    _, a1, a2 = a.real.tolist()

    return Biquad(b0, b1, b2, a1, a2)
