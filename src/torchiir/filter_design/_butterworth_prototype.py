"""Butterworth analog lowpass filter prototype."""

import math
import numbers

import torch

from ._exceptions import InvalidOrderError
from ._zpk import ZPK, make_zpk


def butterworth_prototype(order: int) -> ZPK:
    """
    Butterworth analog lowpass filter prototype.

    Returns the zeros, poles, and gain of an nth-order normalized analog
    lowpass Butterworth filter prototype with cutoff frequency of 1 rad/s.

    Parameters
    ----------
    order : int
        Filter order. Must be a positive integer.

    Returns
    -------
    ZPK
        No zeros, ``order`` poles (complex128) and unit gain.

    Raises
    ------
    InvalidOrderError
        If ``order`` is not a positive integer.

    Notes
    -----
    The poles lie on the unit circle in the left half of the s-plane,
    equally spaced in angle:

    .. math::
        p_m = -e^{j \\pi m / (2n)} \\quad \\text{for } m = -n+1, -n+3, \\ldots, n-1

    Poles with opposite ``m`` are exact conjugates. For odd ``n`` the pole
    with ``m = 0`` is exactly -1.

    Examples
    --------
    >>> zpk = butterworth_prototype(4)
    >>> zpk.poles.shape
    torch.Size([4])
    >>> zpk.gain
    tensor(1., dtype=torch.float64)

    References
    ----------
    .. [1] S. Butterworth, "On the Theory of Filter Amplifiers,"
           Wireless Engineer, vol. 7, pp. 536-541, 1930.
    """
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise InvalidOrderError(
            f"Filter order must be an integer, got {order!r}"
        )
    if order < 1:
        raise InvalidOrderError(f"Filter order must be positive, got {order}")

    order = int(order)

    m = torch.arange(-order + 1, order, 2, dtype=torch.float64)
    angles = math.pi * m / (2 * order)

    # Poles with opposite m are computed once and mirrored
    base = -torch.polar(torch.ones_like(angles), angles.abs())
    poles = torch.where(angles < 0, base.conj(), base)

    return make_zpk([], poles, 1.0)
