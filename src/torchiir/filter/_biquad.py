"""Stateful second-order IIR section."""

from __future__ import annotations

import numbers
from typing import Sequence, Union, overload

import torch
from torch import Tensor


class Biquad:
    """A second-order IIR filter section with its own delay state.

    Implements the difference equation

    .. math::
        y[n] = b_0 x[n] + b_1 x[n-1] + b_2 x[n-2] - a_1 y[n-1] - a_2 y[n-2]

    (Direct Form I, ``a0`` normalized to 1). The delay state starts at zero
    and is only changed by :meth:`process` and :meth:`reset`. An instance
    must not be shared between concurrent streams.

    Parameters
    ----------
    b0, b1, b2 : float
        Numerator (feed-forward) coefficients.
    a1, a2 : float
        Denominator (feedback) coefficients.

    Examples
    --------
    >>> section = Biquad(0.5, 0.5, 0.0, 0.0, 0.0)
    >>> section.process(1.0)
    0.5
    >>> section.process([1.0, 1.0])
    tensor([1., 1.], dtype=torch.float64)
    """

    def __init__(
        self,
        b0: float = 1.0,
        b1: float = 0.0,
        b2: float = 0.0,
        a1: float = 0.0,
        a2: float = 0.0,
    ):
        self._b0 = float(b0)
        self._b1 = float(b1)
        self._b2 = float(b2)
        self._a1 = float(a1)
        self._a2 = float(a2)

        self._x1 = 0.0
        self._x2 = 0.0
        self._y1 = 0.0
        self._y2 = 0.0

    @property
    def coefficients(self) -> Tensor:
        """Snapshot of ``[b0, b1, b2, a1, a2]`` as a float64 tensor."""
        return torch.tensor(
            [self._b0, self._b1, self._b2, self._a1, self._a2],
            dtype=torch.float64,
        )

    @property
    def state(self) -> Tensor:
        """Snapshot of ``[x[n-1], x[n-2], y[n-1], y[n-2]]``."""
        return torch.tensor(
            [self._x1, self._x2, self._y1, self._y2], dtype=torch.float64
        )

    def reset(self) -> None:
        """Zero the delay state."""
        self._x1 = self._x2 = self._y1 = self._y2 = 0.0

    @overload
    def process(self, samples: float) -> float: ...

    @overload
    def process(self, samples: Union[Tensor, Sequence[float]]) -> Tensor: ...

    def process(self, samples):
        """Filter one sample or a 1-D sequence of samples.

        Parameters
        ----------
        samples : float or Tensor or sequence of float
            A single sample, or a 1-D sequence processed in order.

        Returns
        -------
        float or Tensor
            The output sample for scalar input, otherwise a float64 tensor
            with the same length as ``samples``.

        Notes
        -----
        State carries over between calls, so processing a signal in chunks
        gives the same output as processing it in one call.
        """
        if _is_scalar(samples):
            return self._step(float(samples))

        x = _as_signal(samples)
        return torch.tensor(
            [self._step(sample) for sample in x.tolist()],
            dtype=torch.float64,
        )

    def _step(self, x: float) -> float:
        y = (
            self._b0 * x
            + self._b1 * self._x1
            + self._b2 * self._x2
            - self._a1 * self._y1
            - self._a2 * self._y2
        )

        self._x2 = self._x1
        self._x1 = x
        self._y2 = self._y1
        self._y1 = y

        return y

    def __repr__(self) -> str:
        return (
            f"Biquad(b0={self._b0!r}, b1={self._b1!r}, b2={self._b2!r}, "
            f"a1={self._a1!r}, a2={self._a2!r})"
        )


def _is_scalar(samples) -> bool:
    if isinstance(samples, Tensor):
        return samples.ndim == 0
    return isinstance(samples, numbers.Real)


def _as_signal(samples) -> Tensor:
    if isinstance(samples, Tensor):
        x = samples.detach().to(torch.float64)
    else:
        x = torch.as_tensor(samples, dtype=torch.float64)

    if x.ndim != 1:
        raise ValueError(
            f"Expected a scalar or a 1-D sequence of samples, got shape "
            f"{tuple(x.shape)}"
        )

    return x
