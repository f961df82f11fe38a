"""Lowpass to bandpass frequency transform for analog filters."""

from typing import Union

import torch
from torch import Tensor

from ._complex_pair import conjugate_symmetric_map
from ._zpk import ZPK


def lowpass_to_bandpass_zpk(
    zpk: ZPK,
    center_frequency: Union[float, Tensor] = 1.0,
    bandwidth: Union[float, Tensor] = 1.0,
) -> ZPK:
    """
    Transform a lowpass filter prototype to a bandpass filter.

    Performs the analog transformation s -> (s^2 + center_frequency^2) / (bandwidth * s), which
    converts a lowpass filter with cutoff 1 rad/s to a bandpass filter with
    center frequency center_frequency rad/s and bandwidth bandwidth rad/s.

    Parameters
    ----------
    zpk : ZPK
        Zeros, poles and gain of the analog lowpass filter.
    center_frequency : float or Tensor
        Center frequency of the bandpass filter (rad/s).
    bandwidth : float or Tensor
        Bandwidth of the bandpass filter (rad/s).

    Returns
    -------
    ZPK
        Zeros, poles and gain of the bandpass filter.

    Notes
    -----
    The transformation s -> (s^2 + center_frequency^2) / (bandwidth * s):
    - Doubles the filter order (each pole becomes two poles)
    - Adds (len(poles) - len(zeros)) zeros at s=0
    - Maps the lowpass cutoff to the bandpass edges

    For each pole p_k, the new poles are:
        p_new = (bandwidth * p_k / 2) ± sqrt((bandwidth * p_k / 2)^2 - center_frequency^2)

    All ``+`` branches come first, then all ``-`` branches.
    """
    center_frequency = torch.as_tensor(center_frequency, dtype=torch.float64)
    bandwidth = torch.as_tensor(bandwidth, dtype=torch.float64)

    degree = zpk.degree

    # Duplicate poles and zeros and shift from baseband to +wo and -wo
    poles_new = _split(zpk.poles, center_frequency, bandwidth)
    zeros_transformed = _split(zpk.zeros, center_frequency, bandwidth)

    # Move degree zeros to origin, leaving degree zeros at infinity
    zeros_at_origin = torch.zeros(max(degree, 0), dtype=torch.complex128)
    zeros_new = torch.cat([zeros_transformed, zeros_at_origin])

    # Cancel out gain change from frequency scaling
    gain_new = zpk.gain * bandwidth**degree

    return ZPK(zeros=zeros_new, poles=poles_new, gain=gain_new, batch_size=[])


def _split(x: Tensor, center_frequency: Tensor, bandwidth: Tensor) -> Tensor:
    def branches(v: Tensor) -> Tensor:
        half_bw_v = (bandwidth * v) / 2
        sqrt_disc = torch.sqrt(half_bw_v * half_bw_v - center_frequency**2)
        return torch.stack([half_bw_v + sqrt_disc, half_bw_v - sqrt_disc])

    # Rows are the + and - branches
    return conjugate_symmetric_map(branches, x).reshape(-1)
