"""Lowpass to bandstop frequency transform for analog filters."""

from typing import Union

import torch
from torch import Tensor

from ._complex_pair import conjugate_symmetric_map
from ._zpk import ZPK


def lowpass_to_bandstop_zpk(
    zpk: ZPK,
    center_frequency: Union[float, Tensor] = 1.0,
    bandwidth: Union[float, Tensor] = 1.0,
) -> ZPK:
    """
    Transform a lowpass filter prototype to a bandstop (notch) filter.

    Performs the analog transformation s -> bandwidth * s / (s^2 + center_frequency^2), which
    converts a lowpass filter with cutoff 1 rad/s to a bandstop filter with
    center frequency center_frequency rad/s and bandwidth bandwidth rad/s.

    Parameters
    ----------
    zpk : ZPK
        Zeros, poles and gain of the analog lowpass filter.
    center_frequency : float or Tensor
        Center frequency of the bandstop filter (rad/s).
    bandwidth : float or Tensor
        Bandwidth of the bandstop filter (rad/s).

    Returns
    -------
    ZPK
        Zeros, poles and gain of the bandstop filter.

    Notes
    -----
    The transformation s -> bandwidth * s / (s^2 + center_frequency^2):
    - Doubles the filter order (each pole becomes two poles)
    - Adds (len(poles) - len(zeros)) zeros at +j*center_frequency, followed
      by as many at -j*center_frequency
    - Creates a notch at the center frequency

    For each pole p_k, the new poles are:
        p_new = (bandwidth / (2 * p_k)) ± sqrt((bandwidth / (2 * p_k))^2 - center_frequency^2)
    """
    center_frequency = torch.as_tensor(center_frequency, dtype=torch.float64)
    bandwidth = torch.as_tensor(bandwidth, dtype=torch.float64)

    degree = zpk.degree

    # Invert to a highpass filter with desired bandwidth, then duplicate
    # poles and zeros and shift from baseband to +wo and -wo
    poles_new = _split(zpk.poles, center_frequency, bandwidth)
    zeros_transformed = _split(zpk.zeros, center_frequency, bandwidth)

    # Move any zeros that were at infinity to the center of the stopband
    count = max(degree, 0)
    real_part = torch.zeros(count, dtype=torch.float64)
    imag_part = center_frequency.repeat(count)
    zeros_new = torch.cat(
        [
            zeros_transformed,
            torch.complex(real_part, imag_part),
            torch.complex(real_part, -imag_part),
        ]
    )

    # Cancel out gain change caused by inversion
    gain_new = zpk.gain * torch.real(
        torch.prod(-zpk.zeros) / torch.prod(-zpk.poles)
    )

    return ZPK(zeros=zeros_new, poles=poles_new, gain=gain_new, batch_size=[])


def _split(x: Tensor, center_frequency: Tensor, bandwidth: Tensor) -> Tensor:
    def branches(v: Tensor) -> Tensor:
        half_bw_over_v = (bandwidth / 2) / v
        sqrt_disc = torch.sqrt(
            half_bw_over_v * half_bw_over_v - center_frequency**2
        )
        return torch.stack(
            [half_bw_over_v + sqrt_disc, half_bw_over_v - sqrt_disc]
        )

    # Rows are the + and - branches
    return conjugate_symmetric_map(branches, x).reshape(-1)
