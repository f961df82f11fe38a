"""Butterworth digital filter design function."""

from __future__ import annotations

import logging
import math
from typing import List, Literal, Optional, Sequence, Union

import torch
from torch import Tensor

from torchiir.filter._biquad import Biquad

from ._bilinear_transform_zpk import bilinear_transform_zpk
from ._butterworth_prototype import butterworth_prototype
from ._constants import FILTER_TYPES
from ._exceptions import (
    InvalidCutoffError,
    InvalidSamplingFrequencyError,
    NyquistViolationError,
)
from ._lowpass_to_bandpass_zpk import lowpass_to_bandpass_zpk
from ._lowpass_to_bandstop_zpk import lowpass_to_bandstop_zpk
from ._lowpass_to_highpass_zpk import lowpass_to_highpass_zpk
from ._lowpass_to_lowpass_zpk import lowpass_to_lowpass_zpk
from ._zpk_to_sos import zpk_to_sos

_logger = logging.getLogger(__name__)

FilterType = Literal["lowpass", "highpass", "bandpass", "bandstop"]


def butterworth_design(
    order: int,
    cutoff: Union[float, Sequence[float], Tensor],
    filter_type: FilterType = "lowpass",
    sampling_frequency: float = 2.0,
    *,
    tolerance: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
) -> List[Biquad]:
    """Design an Nth-order digital Butterworth filter as biquad sections.

    Parameters
    ----------
    order : int
        Order of the lowpass prototype. Bandpass and bandstop filters have
        twice as many poles.
    cutoff : float or sequence of float or Tensor
        Critical frequency in the units of ``sampling_frequency``. A scalar
        for lowpass and highpass, a pair ``(low, high)`` for bandpass and
        bandstop.
    filter_type : {"lowpass", "highpass", "bandpass", "bandstop"}, optional
        The type of filter. Default is "lowpass".
    sampling_frequency : float, optional
        Sampling frequency. The default of 2.0 makes ``cutoff`` a fraction
        of the Nyquist frequency.
    tolerance : float, optional
        Realness and conjugate-matching tolerance used when forming
        sections. Defaults to ``REAL_TOLERANCE``.
    logger : logging.Logger, optional
        Receives debug records for this design. Defaults to this module's
        logger.

    Returns
    -------
    list of Biquad
        Sections in processing order, fresh (zero) state.

    Raises
    ------
    InvalidOrderError
        If ``order`` is not a positive integer.
    InvalidCutoffError
        If ``cutoff`` has the wrong number of edges, is not positive, or
        ``low >= high``.
    NyquistViolationError
        If a band edge is at or above ``sampling_frequency / 2``.
    InvalidSamplingFrequencyError
        If ``sampling_frequency`` is not positive.
    ValueError
        If ``filter_type`` is unknown.

    Notes
    -----
    The band edges are prewarped to ``2 * fs * tan(pi * f / fs)`` before the
    analog design, so the -3 dB points of the digital filter land exactly on
    ``cutoff`` after the bilinear transform. Bandpass and bandstop filters
    use the geometric center ``sqrt(w_low * w_high)`` and the width
    ``w_high - w_low`` of the prewarped edges.

    Examples
    --------
    >>> sections = butterworth_design(4, 1000.0, "lowpass", 44100.0)
    >>> len(sections)
    2
    >>> sections = butterworth_design(3, [0.2, 0.4], "bandpass")
    >>> len(sections)
    3
    """
    log = logger if logger is not None else _logger

    if filter_type not in FILTER_TYPES:
        raise ValueError(
            f"Invalid filter_type: {filter_type!r}, expected one of "
            f"{FILTER_TYPES}"
        )

    zpk = butterworth_prototype(order)

    if not (
        math.isfinite(float(sampling_frequency)) and sampling_frequency > 0
    ):
        raise InvalidSamplingFrequencyError(
            "Sampling frequency must be a positive number, got "
            f"{sampling_frequency}"
        )
    sampling_frequency = float(sampling_frequency)

    edges = _band_edges(cutoff, filter_type, sampling_frequency)

    # Prewarp so the bilinear transform maps each edge back onto itself
    warped = [
        2 * sampling_frequency * math.tan(math.pi * edge / sampling_frequency)
        for edge in edges
    ]

    log.debug(
        "Designing order %d Butterworth %s filter: cutoff=%s, "
        "sampling_frequency=%s, prewarped=%s rad/s",
        order,
        filter_type,
        edges,
        sampling_frequency,
        warped,
    )

    if filter_type == "lowpass":
        zpk = lowpass_to_lowpass_zpk(zpk, cutoff_frequency=warped[0])
    elif filter_type == "highpass":
        zpk = lowpass_to_highpass_zpk(zpk, cutoff_frequency=warped[0])
    else:
        center_frequency = math.sqrt(warped[0] * warped[1])
        bandwidth = warped[1] - warped[0]
        if filter_type == "bandpass":
            zpk = lowpass_to_bandpass_zpk(
                zpk, center_frequency=center_frequency, bandwidth=bandwidth
            )
        else:
            zpk = lowpass_to_bandstop_zpk(
                zpk, center_frequency=center_frequency, bandwidth=bandwidth
            )

    zpk = bilinear_transform_zpk(zpk, sampling_frequency)

    return zpk_to_sos(zpk, tolerance=tolerance, logger=log)


def _band_edges(
    cutoff: Union[float, Sequence[float], Tensor],
    filter_type: str,
    sampling_frequency: float,
) -> List[float]:
    edges = torch.as_tensor(cutoff, dtype=torch.float64).reshape(-1).tolist()

    expected = 1 if filter_type in ("lowpass", "highpass") else 2
    if len(edges) != expected:
        raise InvalidCutoffError(
            f"A {filter_type} filter needs {expected} cutoff frequency "
            f"value(s), got {len(edges)}"
        )

    if not all(math.isfinite(edge) and edge > 0 for edge in edges):
        raise InvalidCutoffError(
            f"Cutoff frequencies must be positive, got {edges}"
        )
    if expected == 2 and not edges[0] < edges[1]:
        raise InvalidCutoffError(
            f"Cutoff frequencies must satisfy low < high, got {edges}"
        )

    nyquist = sampling_frequency / 2
    if any(edge >= nyquist for edge in edges):
        raise NyquistViolationError(
            f"Cutoff frequencies must be below the Nyquist frequency "
            f"{nyquist}, got {edges}"
        )

    return edges
