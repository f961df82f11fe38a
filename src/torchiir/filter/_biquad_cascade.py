"""Cascade of second-order sections."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple, Union, overload

import torch
from torch import Tensor

from ._biquad import Biquad, _as_signal, _is_scalar


class BiquadCascade:
    """Ordered chain of :class:`Biquad` sections.

    Section 0 sees the input first; each following section filters the
    output of the previous one. The order is fixed at construction.

    Parameters
    ----------
    sections : iterable of Biquad
        Sections in processing order. The cascade takes ownership of them;
        their state is advanced by :meth:`process`.

    Examples
    --------
    >>> cascade = BiquadCascade([Biquad(0.5, 0.5), Biquad(2.0)])
    >>> cascade.process(1.0)
    1.0
    """

    def __init__(self, sections: Iterable[Biquad]):
        self._sections = tuple(sections)

    @property
    def sections(self) -> Tuple[Biquad, ...]:
        """The sections in processing order."""
        return self._sections

    @property
    def sos(self) -> Tensor:
        """Second-order sections, shape (n_sections, 6).

        Each row is [b0, b1, b2, a0, a1, a2] with a0 = 1, the layout used by
        ``scipy.signal.sosfilt``.
        """
        if not self._sections:
            return torch.zeros((0, 6), dtype=torch.float64)

        rows = []
        for section in self._sections:
            b0, b1, b2, a1, a2 = section.coefficients.unbind()
            a0 = torch.ones_like(b0)
            rows.append(torch.stack([b0, b1, b2, a0, a1, a2]))

        return torch.stack(rows)

    def reset(self) -> None:
        """Zero the delay state of every section."""
        for section in self._sections:
            section.reset()

    @overload
    def process(self, samples: float) -> float: ...

    @overload
    def process(self, samples: Union[Tensor, Sequence[float]]) -> Tensor: ...

    def process(self, samples):
        """Filter one sample or a 1-D sequence through every section.

        Same contract as :meth:`Biquad.process`. An empty cascade passes the
        input through unchanged.
        """
        if _is_scalar(samples):
            y = float(samples)
            for section in self._sections:
                y = section.process(y)
            return y

        y = _as_signal(samples)
        if not self._sections:
            return y.clone()

        for section in self._sections:
            y = section.process(y)
        return y

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self):
        return iter(self._sections)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_sections={len(self._sections)})"
