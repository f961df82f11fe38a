"""Zeros-poles-gain tensorclass."""

from __future__ import annotations

from typing import Sequence, Union

import torch
from tensordict import tensorclass
from torch import Tensor


@tensorclass
class ZPK:
    """Zeros, poles and gain of a rational transfer function.

    Represents

    .. math::
        H(s) = k \\frac{\\prod_i (s - z_i)}{\\prod_j (s - p_j)}

    Every pipeline stage returns a new ZPK and leaves its input untouched.

    Attributes
    ----------
    zeros : Tensor
        Zeros, shape (n_zeros,), complex128.
    poles : Tensor
        Poles, shape (n_poles,), complex128.
    gain : Tensor
        System gain, 0-dimensional float64.
    """

    zeros: Tensor
    poles: Tensor
    gain: Tensor

    @property
    def degree(self) -> int:
        """Number of poles minus number of zeros."""
        return self.poles.numel() - self.zeros.numel()


def make_zpk(
    zeros: Union[Tensor, Sequence[complex]],
    poles: Union[Tensor, Sequence[complex]],
    gain: Union[Tensor, float],
) -> ZPK:
    """Build a ZPK from tensors or Python values in the canonical dtypes.

    Zeros and poles are flattened and cast to ``torch.complex128``, the gain
    to a 0-dimensional ``torch.float64`` tensor. Complex gains are rejected.

    Examples
    --------
    >>> zpk = make_zpk([], [-1.0], 1.0)
    >>> zpk.degree
    1
    """
    zeros = _as_complex(zeros)
    poles = _as_complex(poles)

    if isinstance(gain, complex) or (
        isinstance(gain, Tensor) and gain.is_complex()
    ):
        raise ValueError(f"gain must be real, got {gain}")
    if isinstance(gain, Tensor):
        gain = gain.to(torch.float64)
    else:
        gain = torch.as_tensor(gain, dtype=torch.float64)
    gain = gain.reshape(())

    return ZPK(zeros=zeros, poles=poles, gain=gain, batch_size=[])


def _as_complex(values) -> Tensor:
    if isinstance(values, Tensor):
        return values.to(torch.complex128).reshape(-1)
    return torch.as_tensor(values, dtype=torch.complex128).reshape(-1)
