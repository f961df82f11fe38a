"""Conjugate pair validation and nearest-element helpers."""

from typing import Callable, Optional, Tuple

import torch
from torch import Tensor

from ._constants import resolve_tolerance
from ._exceptions import InvalidPairingError, UnbalancedFactorizationError


def is_real(x: Tensor, *, tolerance: Optional[float] = None) -> Tensor:
    """Elementwise test for a negligible imaginary part.

    Parameters
    ----------
    x : Tensor
        Values to test. Real dtypes are real everywhere.
    tolerance : float, optional
        Absolute bound on ``|imag(x)|``. Defaults to ``REAL_TOLERANCE``.

    Returns
    -------
    Tensor
        Boolean tensor with the shape of ``x``.
    """
    tolerance = resolve_tolerance(tolerance)

    if not x.is_complex():
        return torch.ones_like(x, dtype=torch.bool)

    return x.imag.abs() < tolerance


def conjugate_symmetric_map(
    fn: Callable[[Tensor], Tensor], x: Tensor
) -> Tensor:
    """Apply ``fn`` so that conjugate inputs give exactly conjugate outputs.

    ``fn`` must commute with conjugation in exact arithmetic (a rational
    function or principal square root with real coefficients). It is
    evaluated only on the representatives with ``imag >= 0``; the results
    for inputs with negative imaginary part are the conjugates of those.
    Torch's vectorized complex kernels do not guarantee this on their own.

    Parameters
    ----------
    fn : callable
        Elementwise map. Its output may add leading dimensions, which are
        broadcast against ``x``.
    x : Tensor
        Complex input values.

    Returns
    -------
    Tensor
        ``fn(x)`` with conjugate symmetry enforced.
    """
    lower = x.imag < 0
    y = fn(torch.where(lower, x.conj(), x))
    return torch.where(lower, y.conj(), y)


def pop_nearest(
    candidates: Tensor,
    target: Tensor,
    *,
    real: Optional[bool] = None,
    tolerance: Optional[float] = None,
) -> Tuple[Tensor, Tensor]:
    """Remove and return the candidate closest to ``target``.

    Parameters
    ----------
    candidates : Tensor
        1-D tensor to pick from.
    target : Tensor
        Scalar the distance ``|candidate - target|`` is measured to.
    real : bool, optional
        If True only real candidates qualify, if False only non-real ones.
        If None every candidate qualifies.
    tolerance : float, optional
        Realness tolerance. Defaults to ``REAL_TOLERANCE``.

    Returns
    -------
    value : Tensor
        The nearest qualifying candidate (first one on ties).
    remaining : Tensor
        ``candidates`` with that element removed, order preserved.

    Raises
    ------
    UnbalancedFactorizationError
        If no candidate qualifies.
    """
    distance = (candidates - target).abs()

    if real is not None:
        mask = is_real(candidates, tolerance=tolerance)
        if not real:
            mask = ~mask
        distance = torch.where(
            mask, distance, torch.full_like(distance, float("inf"))
        )
    else:
        mask = torch.ones_like(distance, dtype=torch.bool)

    if not bool(mask.any()):
        kind = {None: "", True: "real ", False: "complex "}[real]
        raise UnbalancedFactorizationError(
            f"No {kind}value left to pair with {complex(target)}"
        )

    index = int(torch.argmin(distance))
    value = candidates[index]
    remaining = torch.cat([candidates[:index], candidates[index + 1 :]])

    return value, remaining


def complex_pair(
    values: Tensor,
    *,
    tolerance: Optional[float] = None,
) -> Tuple[Tensor, Tensor]:
    """
    Check that complex values come in conjugate pairs and split them.

    Parameters
    ----------
    values : Tensor
        1-D tensor of real values and complex conjugate pairs, in any order.
    tolerance : float, optional
        Realness and conjugate-matching tolerance. Defaults to
        ``REAL_TOLERANCE``.

    Returns
    -------
    reals : Tensor
        Real parts of the values whose imaginary part is below tolerance,
        float64, sorted ascending.
    positives : Tensor
        The member with positive imaginary part of each conjugate pair,
        complex128, sorted by real and then imaginary part.

    Raises
    ------
    InvalidPairingError
        If a complex value has no matching conjugate.

    Notes
    -----
    The members with negative imaginary part are dropped; they are
    ``positives.conj()``.

    Examples
    --------
    >>> values = torch.tensor([1 - 1j, 0.5 + 0j, 1 + 1j], dtype=torch.complex128)
    >>> reals, positives = complex_pair(values)
    >>> reals
    tensor([0.5000], dtype=torch.float64)
    >>> positives
    tensor([1.+1.j], dtype=torch.complex128)
    """
    tolerance = resolve_tolerance(tolerance)
    values = values.to(torch.complex128).reshape(-1)

    # Sort by real part, then imaginary part
    values = values[torch.sort(values.imag, stable=True).indices]
    values = values[torch.sort(values.real, stable=True).indices]

    real_mask = is_real(values, tolerance=tolerance)
    reals = values[real_mask].real
    positives = values[~real_mask & (values.imag > 0)]
    negatives = values[~real_mask & (values.imag < 0)]

    if positives.numel() != negatives.numel():
        raise InvalidPairingError(
            "Array contains complex value with no matching conjugate: "
            f"{positives.numel()} with positive and {negatives.numel()} "
            "with negative imaginary part"
        )

    unmatched = torch.ones(negatives.numel(), dtype=torch.bool)
    for value in positives:
        distance = (value - negatives.conj()).abs()
        candidates = unmatched & (distance < tolerance)
        if not bool(candidates.any()):
            raise InvalidPairingError(
                "Array contains complex value with no matching conjugate: "
                f"{complex(value)}"
            )
        unmatched[int(torch.nonzero(candidates)[0])] = False

    return reals, positives
