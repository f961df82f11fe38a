"""Butterworth IIR filter design: analog prototype to second-order sections."""

from ._bilinear_transform_zpk import bilinear_transform_zpk
from ._butterworth_design import butterworth_design
from ._butterworth_prototype import butterworth_prototype
from ._complex_pair import (
    complex_pair,
    conjugate_symmetric_map,
    is_real,
    pop_nearest,
)
from ._constants import FILTER_TYPES, REAL_TOLERANCE
from ._exceptions import (
    ComplexCoefficientError,
    FilterDesignError,
    InvalidCutoffError,
    InvalidOrderError,
    InvalidPairingError,
    InvalidSamplingFrequencyError,
    NyquistViolationError,
    UnbalancedFactorizationError,
)
from ._lowpass_to_bandpass_zpk import lowpass_to_bandpass_zpk
from ._lowpass_to_bandstop_zpk import lowpass_to_bandstop_zpk
from ._lowpass_to_highpass_zpk import lowpass_to_highpass_zpk
from ._lowpass_to_lowpass_zpk import lowpass_to_lowpass_zpk
from ._zpk import ZPK, make_zpk
from ._zpk_to_biquad import zpk_to_biquad
from ._zpk_to_sos import zpk_to_sos

__all__ = [
    # Design functions
    "butterworth_design",
    "butterworth_prototype",
    # Transforms
    "bilinear_transform_zpk",
    "lowpass_to_bandpass_zpk",
    "lowpass_to_bandstop_zpk",
    "lowpass_to_highpass_zpk",
    "lowpass_to_lowpass_zpk",
    # Conversions
    "zpk_to_biquad",
    "zpk_to_sos",
    # Conjugate pairs
    "complex_pair",
    "conjugate_symmetric_map",
    "is_real",
    "pop_nearest",
    # Representation
    "ZPK",
    "make_zpk",
    # Constants
    "FILTER_TYPES",
    "REAL_TOLERANCE",
    # Exceptions
    "ComplexCoefficientError",
    "FilterDesignError",
    "InvalidCutoffError",
    "InvalidOrderError",
    "InvalidPairingError",
    "InvalidSamplingFrequencyError",
    "NyquistViolationError",
    "UnbalancedFactorizationError",
]
