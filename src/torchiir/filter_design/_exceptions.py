"""Exceptions for filter design module."""


class FilterDesignError(Exception):
    """Base exception for filter design errors."""

    pass


class InvalidOrderError(FilterDesignError, ValueError):
    """Raised when filter order is invalid.

    This occurs when:
    - Order is not a positive integer
    """

    pass


class InvalidCutoffError(FilterDesignError, ValueError):
    """Raised when cutoff frequency is invalid.

    This occurs when:
    - Cutoff is not positive
    - Wrong number of band edges for the filter type
    - For bandpass/bandstop, low >= high frequency
    """

    pass


class NyquistViolationError(FilterDesignError, ValueError):
    """Raised when frequency exceeds the Nyquist frequency.

    This occurs when:
    - Cutoff >= sampling_frequency / 2
    - Band edges reach or exceed Nyquist
    """

    pass


class InvalidSamplingFrequencyError(FilterDesignError, ValueError):
    """Raised when the sampling frequency is not a positive number."""

    pass


class InvalidPairingError(FilterDesignError, ValueError):
    """Raised when complex values cannot be grouped into conjugate pairs.

    This occurs when:
    - The number of values with positive and negative imaginary part differ
    - A value with positive imaginary part has no conjugate within tolerance
    """

    pass


class ComplexCoefficientError(FilterDesignError, ArithmeticError):
    """Raised when a second-order section expands to complex coefficients.

    A pole or zero pair that is not a conjugate pair (or two reals) yields a
    quadratic with non-negligible imaginary coefficients. The imaginary part
    is never discarded.
    """

    pass


class UnbalancedFactorizationError(FilterDesignError, RuntimeError):
    """Raised when poles and zeros cannot be consumed exactly by SOS pairing.

    This occurs when:
    - A pole finds no zero (or pole) of the required kind to pair with
    - Poles or zeros remain after all sections have been formed
    """

    pass
