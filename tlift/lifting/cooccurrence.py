"""
Probe co-occurrence mask.
Two probe samples co-occur when their capture times are closer than tau.
"""

import numpy as np


def pairwise_time_diff(times: np.ndarray) -> np.ndarray:
    """
    Signed pairwise differences D[a, b] = times[a] - times[b].

    Args:
        times: 1-D array of capture times

    Returns:
        (N, N) antisymmetric matrix with a zero diagonal
    """
    times = np.asarray(times, dtype=np.float64).ravel()
    return times[:, np.newaxis] - times[np.newaxis, :]


def build_cooccurrence_mask(prob_time: np.ndarray, tau: float) -> np.ndarray:
    """
    Build the (P, P) boolean mask M[i, j] = |t_i - t_j| < tau.

    The mask is symmetric, and reflexive whenever tau > 0. A non-positive
    tau is not rejected here; it simply yields a mask with no true entries.

    Args:
        prob_time: Capture times of the probe samples (P,)
        tau: Interval threshold defining nearby persons

    Returns:
        Boolean co-occurrence mask (P, P)
    """
    return np.abs(pairwise_time_diff(prob_time)) < tau
