"""
Gaussian time kernel averaged over a pivot set.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


def gaussian_kernel(dt: np.ndarray, sigma: float) -> np.ndarray:
    """exp(-dt^2 / sigma^2), element-wise. sigma may be inf (kernel == 1)."""
    dt = np.asarray(dt, dtype=np.float64)
    return np.exp(-np.square(dt) / (sigma ** 2))


def temporal_weights(
    time_diff: np.ndarray,
    mask_in_gal: np.ndarray,
    sigma: float,
) -> np.ndarray:
    """
    Mean kernel value between each gallery sample and the pivot samples.

    Args:
        time_diff: Signed time differences of one gallery camera (Nc, Nc)
        mask_in_gal: Pivot mask over the same camera (Nc,)
        sigma: Kernel bandwidth

    Returns:
        Weights (Nc,). An empty pivot set yields all zeros, i.e. no
        temporal boost.
    """
    if not np.any(mask_in_gal):
        logger.debug("Empty pivot set, using zero temporal weight")
        return np.zeros(time_diff.shape[0], dtype=np.float64)

    dt = time_diff[:, mask_in_gal]
    return gaussian_kernel(dt, sigma).mean(axis=1)
