"""Grid fingerprints for stability and cycle detection."""

import hashlib
from typing import Union

import numpy as np

from .grid import Grid

FINGERPRINT_BYTES = 16  # 128-bit digest


def fingerprint(grid: Union[Grid, np.ndarray]) -> str:
    """Digest of the row-major sequence of cell values.

    Identical cell values at identical positions always give the same
    fingerprint, across processes and platforms.

    Args:
        grid: Grid or 2D uint8 state array

    Returns:
        Hex digest string (32 characters)
    """
    state = grid.state if isinstance(grid, Grid) else grid
    buf = np.ascontiguousarray(state, dtype=np.uint8).tobytes()
    return hashlib.blake2b(buf, digest_size=FINGERPRINT_BYTES).hexdigest()
