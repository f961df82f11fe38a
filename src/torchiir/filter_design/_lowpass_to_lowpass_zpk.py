"""Lowpass to lowpass frequency transform for analog filters."""

from typing import Union

import torch
from torch import Tensor

from ._complex_pair import conjugate_symmetric_map
from ._zpk import ZPK


def lowpass_to_lowpass_zpk(
    zpk: ZPK,
    cutoff_frequency: Union[float, Tensor] = 1.0,
) -> ZPK:
    """
    Transform a lowpass filter prototype to a different cutoff frequency.

    Performs the analog transformation s -> s / cutoff_frequency, which moves
    the cutoff of a lowpass filter from 1 rad/s to cutoff_frequency rad/s.

    Parameters
    ----------
    zpk : ZPK
        Zeros, poles and gain of the analog lowpass filter.
    cutoff_frequency : float or Tensor
        Desired cutoff frequency (rad/s).

    Returns
    -------
    ZPK
        Zeros, poles and gain of the transformed lowpass filter.

    Notes
    -----
    - Scales zeros and poles radially by cutoff_frequency
    - Multiplies the gain by cutoff_frequency ** (len(poles) - len(zeros))
      so the passband gain is unchanged
    """
    cutoff_frequency = torch.as_tensor(cutoff_frequency, dtype=torch.float64)

    degree = zpk.degree

    # Scale all points radially from origin to shift cutoff frequency
    zeros_new = conjugate_symmetric_map(
        lambda v: cutoff_frequency * v, zpk.zeros
    )
    poles_new = conjugate_symmetric_map(
        lambda v: cutoff_frequency * v, zpk.poles
    )

    # Each shifted pole decreases gain by cutoff_frequency, each shifted
    # zero increases it
    gain_new = zpk.gain * cutoff_frequency**degree

    return ZPK(zeros=zeros_new, poles=poles_new, gain=gain_new, batch_size=[])
