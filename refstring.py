"""
Synthetic reference strings with locality of reference.

Pages are drawn from a window of ``e`` consecutive page numbers starting at
the locus. Every ``m`` references the locus either slides one page up
(wrapping) or, with probability ``t``, jumps to a random position.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

# bits per random draw, reduced modulo the window or locus range
_DRAW_BITS = 62


class InvalidParameter(ValueError):
    """Raised when a generator or simulator receives an unusable parameter"""


@dataclass(frozen=True)
class LocalityParameters:
    P: int      # address space size, pages are in [0, P)
    e: int      # window width
    m: int      # references issued before the locus moves
    t: float    # jump probability

    def validate(self):
        if self.e <= 0:
            raise InvalidParameter(f"window width e must be positive, got {self.e}")
        if self.e > self.P:
            raise InvalidParameter(f"window width e={self.e} exceeds address space P={self.P}")
        if self.m <= 0:
            raise InvalidParameter(f"dwell length m must be positive, got {self.m}")
        if self.e == 1 and not (self.m == 1 and self.t <= 0 and self.P >= 2):
            # a one-page window only avoids repeats if the locus slides after every reference
            raise InvalidParameter(f"window width e=1 needs m=1, t<=0 and P>=2, "
                                   f"got P={self.P} m={self.m} t={self.t}")
        return self

    @property
    def positions(self) -> int:
        """Number of distinct locus positions"""
        return self.P - self.e + 1


def generate_reference_string(params: LocalityParameters, length: int,
                              seed: Optional[int] = None,
                              rng: Optional[random.Random] = None) -> np.ndarray:
    """
    Generate a read-only reference string of ``length`` page numbers.

    Passing ``seed`` (or a seeded ``rng``) makes the output reproducible.
    """
    params.validate()
    if length <= 0:
        raise InvalidParameter(f"reference string length must be positive, got {length}")
    if rng is None:
        rng = random.Random(seed)

    e, m, t = params.e, params.m, params.t
    positions = params.positions
    pages = np.empty(length, dtype=np.int64)

    locus = 0
    count = 0
    previous = -1
    rejected = 0
    while count < length:
        page = locus + rng.getrandbits(_DRAW_BITS) % e
        if page == previous:
            rejected += 1
            continue
        pages[count] = page
        previous = page
        count += 1

        if count % m == 0:
            if rng.random() < t:
                locus = rng.getrandbits(_DRAW_BITS) % positions
            else:
                locus = (locus + 1) % positions

    logger.debug("generated %d references (P=%d e=%d m=%d t=%s), %d redraws",
                 length, params.P, e, m, t, rejected)
    pages.flags.writeable = False
    return pages


def save_reference_string(reference_string, filename):
    """Save a reference string to a .npy file"""
    np.save(filename, np.asarray(reference_string, dtype=np.int64))


def load_reference_string(filename, P: Optional[int] = None) -> np.ndarray:
    """
    Load a reference string saved by save_reference_string.

    When ``P`` is given every page must lie in [0, P). Immediate repeats are
    accepted but logged, since generated strings never contain them.
    """
    try:
        pages = np.load(filename)
    except (OSError, ValueError) as err:
        raise InvalidParameter(f"cannot read reference string from {filename}: {err}") from err
    if not isinstance(pages, np.ndarray) or pages.ndim != 1 or pages.size == 0:
        raise InvalidParameter(f"{filename} does not hold a non-empty reference string")
    if not np.issubdtype(pages.dtype, np.integer):
        raise InvalidParameter(f"{filename} holds {pages.dtype} values, page numbers must be integers")
    if pages.min() < 0:
        raise InvalidParameter(f"{filename} contains negative page numbers")
    if P is not None and pages.max() >= P:
        raise InvalidParameter(f"{filename} contains page {pages.max()} outside [0, {P})")

    repeats = int(np.count_nonzero(pages[1:] == pages[:-1]))
    if repeats:
        logger.warning("%s contains %d immediate repeats", filename, repeats)

    pages = pages.astype(np.int64, copy=False)
    pages.flags.writeable = False
    return pages
