"""Bilinear transform for analog to digital filter conversion."""

import math
from typing import Union

import torch
from torch import Tensor

from ._complex_pair import conjugate_symmetric_map
from ._exceptions import InvalidSamplingFrequencyError
from ._zpk import ZPK


def bilinear_transform_zpk(
    zpk: ZPK,
    sampling_frequency: Union[float, Tensor],
) -> ZPK:
    """
    Transform an analog filter to a digital filter using bilinear transform.

    The bilinear transform (Tustin's method) maps the s-plane to the z-plane
    using:
    s = (2*sampling_frequency) * (z - 1) / (z + 1)

    Parameters
    ----------
    zpk : ZPK
        Zeros, poles and gain of the analog filter.
    sampling_frequency : float or Tensor
        Sampling frequency (Hz, not rad/s).

    Returns
    -------
    ZPK
        Zeros, poles and gain of the digital filter.

    Raises
    ------
    InvalidSamplingFrequencyError
        If ``sampling_frequency`` is not a positive finite number.

    Notes
    -----
    The bilinear transform:
    - Maps left half-plane (stable analog) to inside unit circle (stable digital)
    - Maps imaginary axis to unit circle
    - Introduces frequency warping: omega_d = 2*sampling_frequency * arctan(omega_a / (2*sampling_frequency))
    - Adds zeros at z=-1 for each degree difference (all-pole analog -> FIR zeros)

    No frequency prewarping is done here. A caller that needs the digital
    filter's critical frequency to land exactly on a target f must design
    the analog filter at 2*sampling_frequency*tan(pi*f/sampling_frequency)
    instead of 2*pi*f (as ``butterworth_design`` does).
    """
    sampling_frequency = torch.as_tensor(
        sampling_frequency, dtype=torch.float64
    )
    if not (
        sampling_frequency.numel() == 1
        and math.isfinite(sampling_frequency.item())
        and sampling_frequency.item() > 0
    ):
        raise InvalidSamplingFrequencyError(
            "Sampling frequency must be a positive number, got "
            f"{sampling_frequency.tolist()}"
        )

    fs2 = 2 * sampling_frequency.reshape(())

    degree = zpk.degree

    # Bilinear transform the poles and zeros
    def tustin(v: Tensor) -> Tensor:
        return (fs2 + v) / (fs2 - v)

    zeros_transformed = conjugate_symmetric_map(tustin, zpk.zeros)
    poles_digital = conjugate_symmetric_map(tustin, zpk.poles)

    # Any zeros that were at infinity get moved to the Nyquist frequency
    zeros_at_nyquist = -torch.ones(max(degree, 0), dtype=torch.complex128)
    zeros_digital = torch.cat([zeros_transformed, zeros_at_nyquist])

    # Compensate for gain change
    # gain_digital = gain * real(prod(fs2 - zeros) / prod(fs2 - poles))
    gain_digital = zpk.gain * torch.real(
        torch.prod(fs2 - zpk.zeros) / torch.prod(fs2 - zpk.poles)
    )

    return ZPK(
        zeros=zeros_digital,
        poles=poles_digital,
        gain=gain_digital,
        batch_size=[],
    )
