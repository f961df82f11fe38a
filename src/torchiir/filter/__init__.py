"""Runtime second-order IIR sections and cascades."""

from ._biquad import Biquad
from ._biquad_cascade import BiquadCascade
from ._butterworth import Butterworth

__all__ = [
    "Biquad",
    "BiquadCascade",
    "Butterworth",
]
