"""Conversion from zeros-poles-gain to second-order sections."""

import logging
from typing import List, Optional, Tuple

import torch
from torch import Tensor

from torchiir.filter._biquad import Biquad

from ._complex_pair import complex_pair, is_real, pop_nearest
from ._exceptions import UnbalancedFactorizationError
from ._zpk import ZPK
from ._zpk_to_biquad import zpk_to_biquad

_logger = logging.getLogger(__name__)


def zpk_to_sos(
    zpk: ZPK,
    pairing: str = "nearest",
    *,
    tolerance: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
) -> List[Biquad]:
    """
    Convert zeros, poles, and gain to second-order sections.

    Parameters
    ----------
    zpk : ZPK
        Zeros, poles and gain of a digital filter. Complex zeros and poles
        must come in conjugate pairs.
    pairing : {"nearest", "keep_odd"}, optional
        "nearest" (default) pads odd-order systems with a pole and a zero
        at the origin so every section is paired by proximity. "keep_odd"
        keeps one first-order section for odd-order systems.
    tolerance : float, optional
        Realness and conjugate-matching tolerance. Defaults to
        ``REAL_TOLERANCE``.
    logger : logging.Logger, optional
        Receives debug records about padding and pairing. Defaults to this
        module's logger.

    Returns
    -------
    list of Biquad
        ``ceil(max(len(zeros), len(poles)) / 2)`` sections in processing
        order. The whole gain sits in the last section; the others have
        unit gain.

    Raises
    ------
    ValueError
        If ``pairing`` is unknown.
    InvalidPairingError
        If zeros or poles contain a complex value without its conjugate.
    ComplexCoefficientError
        If a section expands to complex coefficients.
    UnbalancedFactorizationError
        If pairing leaves poles or zeros unconsumed.

    Notes
    -----
    The pairing minimizes the peak gain of each section by pairing poles
    with the nearest zeros, starting with the poles closest to the unit
    circle. Only digital filters are handled correctly.

    Zeros or poles at the origin are added until both counts are equal; an
    odd count gets one more pole and zero at the origin (``"nearest"``
    only). Then, until no pole is left:

    1. Take the remaining pole closest to the unit circle.
    2. If it is real and no other real pole remains, pair it with the
       nearest real zero as a first-order section.
    3. Else, if it is complex and exactly one real zero remains, pair it
       with the nearest complex zero so a real zero is kept for a
       first-order section. Otherwise pair it with the nearest zero.
    4. Complete the section:

       - complex pole, complex zero: add both conjugates
       - complex pole, real zero: add the conjugate pole and the nearest
         remaining real zero
       - real pole, complex zero: add the conjugate zero and the real pole
         nearest to that zero
       - real pole, real zero: add the next real pole closest to the unit
         circle and the real zero nearest to it

    Sections are emitted in reverse order, so the pole closest to the unit
    circle ends up in the last section.
    """
    if pairing not in ("nearest", "keep_odd"):
        raise ValueError(
            f"pairing must be 'nearest' or 'keep_odd', got {pairing!r}"
        )

    log = logger if logger is not None else _logger

    zeros = zpk.zeros
    poles = zpk.poles
    count = max(zeros.numel(), poles.numel())

    if count == 0:
        return []

    # Ensure we have the same number of poles and zeros
    zeros = _pad_with_origin(zeros, count)
    poles = _pad_with_origin(poles, count)

    n_sections = (count + 1) // 2

    if count % 2 == 1 and pairing == "nearest":
        zeros = _pad_with_origin(zeros, count + 1)
        poles = _pad_with_origin(poles, count + 1)

    log.debug(
        "Pairing %d zeros and %d poles (padded to %d) into %d sections",
        zpk.zeros.numel(),
        zpk.poles.numel(),
        poles.numel(),
        n_sections,
    )

    # Ensure we have complex conjugate pairs, keeping one member of each
    zeros = _real_then_complex(complex_pair(zeros, tolerance=tolerance))
    poles = _real_then_complex(complex_pair(poles, tolerance=tolerance))

    # Sort poles by how close they are to the unit circle
    poles = poles[torch.sort((poles.abs() - 1).abs(), stable=True).indices]

    origin = torch.zeros((), dtype=torch.complex128)
    pairs: List[Tuple[Tensor, Tensor]] = []

    for _ in range(n_sections):
        # Select the next "worst" pole
        p1, poles = poles[0], poles[1:]

        p1_real = bool(is_real(p1, tolerance=tolerance))
        poles_real = is_real(poles, tolerance=tolerance)

        if p1_real and not bool(poles_real.any()):
            # Special case to set a first-order section
            z1, zeros = pop_nearest(zeros, p1, real=True, tolerance=tolerance)
            p2 = origin
            z2 = origin
        else:
            zeros_real = is_real(zeros, tolerance=tolerance)
            if not p1_real and int(zeros_real.sum()) == 1:
                # Keep the lone real zero for a later first-order section
                z1, zeros = pop_nearest(
                    zeros, p1, real=False, tolerance=tolerance
                )
            else:
                z1, zeros = pop_nearest(zeros, p1)

            z1_real = bool(is_real(z1, tolerance=tolerance))

            if not p1_real:
                p2 = p1.conj()
                if not z1_real:
                    z2 = z1.conj()
                else:
                    z2, zeros = pop_nearest(
                        zeros, p1, real=True, tolerance=tolerance
                    )
            elif not z1_real:
                z2 = z1.conj()
                p2, poles = pop_nearest(
                    poles, z1, real=True, tolerance=tolerance
                )
            else:
                # Pick the next "worst" real pole
                index = int(torch.nonzero(poles_real)[0])
                p2 = poles[index]
                poles = torch.cat([poles[:index], poles[index + 1 :]])
                z2, zeros = pop_nearest(
                    zeros, p2, real=True, tolerance=tolerance
                )

        log.debug(
            "Section %d: poles (%s, %s), zeros (%s, %s)",
            len(pairs),
            complex(p1),
            complex(p2),
            complex(z1),
            complex(z2),
        )
        pairs.append((torch.stack([z1, z2]), torch.stack([p1, p2])))

    if poles.numel() > 0 or zeros.numel() > 0:
        raise UnbalancedFactorizationError(
            f"{poles.numel()} poles and {zeros.numel()} zeros left after "
            f"forming {n_sections} sections"
        )

    # Construct the system, reversing order so the "worst" are last
    unit_gain = torch.ones((), dtype=torch.float64)
    sections = []
    for index, (section_zeros, section_poles) in enumerate(reversed(pairs)):
        gain = zpk.gain if index == n_sections - 1 else unit_gain
        section = ZPK(
            zeros=section_zeros,
            poles=section_poles,
            gain=gain,
            batch_size=[],
        )
        sections.append(zpk_to_biquad(section, tolerance=tolerance))

    return sections


def _pad_with_origin(x: Tensor, size: int) -> Tensor:
    padding = torch.zeros(size - x.numel(), dtype=x.dtype, device=x.device)
    return torch.cat([x, padding])


def _real_then_complex(parts: Tuple[Tensor, Tensor]) -> Tensor:
    reals, positives = parts
    return torch.cat([reals.to(torch.complex128), positives])
