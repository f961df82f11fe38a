"""Lowpass to highpass frequency transform for analog filters."""

from typing import Union

import torch
from torch import Tensor

from ._complex_pair import conjugate_symmetric_map
from ._zpk import ZPK


def lowpass_to_highpass_zpk(
    zpk: ZPK,
    cutoff_frequency: Union[float, Tensor] = 1.0,
) -> ZPK:
    """
    Transform a lowpass filter prototype to a highpass filter.

    Performs the analog transformation s -> cutoff_frequency/s, which converts a
    lowpass filter with cutoff 1 rad/s to a highpass filter with
    cutoff cutoff_frequency rad/s.

    Parameters
    ----------
    zpk : ZPK
        Zeros, poles and gain of the analog lowpass filter.
    cutoff_frequency : float or Tensor
        Cutoff frequency of the highpass filter (rad/s).

    Returns
    -------
    ZPK
        Zeros, poles and gain of the highpass filter.

    Notes
    -----
    The transformation s -> cutoff_frequency/s:
    - Maps poles p_k to cutoff_frequency/p_k
    - Maps zeros z_k to cutoff_frequency/z_k
    - Adds (len(poles) - len(zeros)) zeros at s=0
    - Adjusts gain to maintain correct high-frequency response
    """
    cutoff_frequency = torch.as_tensor(cutoff_frequency, dtype=torch.float64)

    degree = zpk.degree

    # Invert positions radially about unit circle to convert LPF to HPF
    poles_new = conjugate_symmetric_map(
        lambda v: cutoff_frequency / v, zpk.poles
    )
    zeros_transformed = conjugate_symmetric_map(
        lambda v: cutoff_frequency / v, zpk.zeros
    )

    # If lowpass had zeros at infinity, inverting moves them to origin
    zeros_at_origin = torch.zeros(max(degree, 0), dtype=torch.complex128)
    zeros_new = torch.cat([zeros_transformed, zeros_at_origin])

    # Cancel out gain change caused by inversion, using the input zeros
    # and poles: gain_new = gain * real(prod(-zeros) / prod(-poles))
    gain_new = zpk.gain * torch.real(
        torch.prod(-zpk.zeros) / torch.prod(-zpk.poles)
    )

    return ZPK(zeros=zeros_new, poles=poles_new, gain=gain_new, batch_size=[])
