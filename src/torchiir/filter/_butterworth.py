"""Butterworth filter object."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple, Union

import torch
from torch import Tensor

from ._biquad_cascade import BiquadCascade


class Butterworth(BiquadCascade):
    """A digital Butterworth filter ready to process samples.

    Designs the sections with
    :func:`torchiir.filter_design.butterworth_design` and runs signals
    through them in order.

    Parameters
    ----------
    order : int
        Order of the lowpass prototype.
    cutoff : float or array_like
        Critical frequency, or ``(low, high)`` for bandpass and bandstop,
        in the units of ``sampling_frequency``.
    filter_type : {"lowpass", "highpass", "bandpass", "bandstop"}, optional
        Default is "lowpass".
    sampling_frequency : float, optional
        Default is 2.0 (cutoff relative to Nyquist).
    tolerance : float, optional
        Realness and conjugate-matching tolerance for the design.
    logger : logging.Logger, optional
        Receives debug records for the design.

    Examples
    --------
    >>> lowpass = Butterworth(2, 1000.0, "lowpass", 44100.0)
    >>> len(lowpass)
    1
    >>> y = lowpass.process([1.0, 0.0, 0.0, 0.0])
    """

    def __init__(
        self,
        order: int,
        cutoff: Union[float, Sequence[float], Tensor],
        filter_type: str = "lowpass",
        sampling_frequency: float = 2.0,
        *,
        tolerance: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        from torchiir.filter_design import butterworth_design

        sections = butterworth_design(
            order,
            cutoff,
            filter_type,
            sampling_frequency,
            tolerance=tolerance,
            logger=logger,
        )
        super().__init__(sections)

        self._order = order
        edges = torch.as_tensor(cutoff, dtype=torch.float64)
        self._cutoff = (
            edges.item()
            if edges.ndim == 0
            else tuple(edges.reshape(-1).tolist())
        )
        self._filter_type = filter_type
        self._sampling_frequency = float(sampling_frequency)

    @property
    def order(self) -> int:
        return self._order

    @property
    def cutoff(self) -> Union[float, Tuple[float, ...]]:
        return self._cutoff

    @property
    def filter_type(self) -> str:
        return self._filter_type

    @property
    def sampling_frequency(self) -> float:
        return self._sampling_frequency

    def __repr__(self) -> str:
        return (
            f"Butterworth(order={self._order}, cutoff={self._cutoff}, "
            f"filter_type={self._filter_type!r}, "
            f"sampling_frequency={self._sampling_frequency})"
        )
