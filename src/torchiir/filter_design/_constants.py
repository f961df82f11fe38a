"""Constants for filter design module."""

import torch

# Tolerance for classifying a value as real and for matching conjugates.
REAL_TOLERANCE: float = 100 * torch.finfo(torch.float64).eps

FILTER_TYPES = ("lowpass", "highpass", "bandpass", "bandstop")


def resolve_tolerance(tolerance=None) -> float:
    if tolerance is None:
        return REAL_TOLERANCE
    tolerance = float(tolerance)
    if not tolerance > 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    return tolerance
