"""
Multiplicative fusion of temporal weights with appearance scores.
"""

import numpy as np


def fuse_scores(weights: np.ndarray, in_score: np.ndarray, alpha: float) -> np.ndarray:
    """
    out = (weights + alpha) * in_score, element-wise.

    Args:
        weights: Temporal weights (G, P)
        in_score: Appearance scores (G, P)
        alpha: Regularizer added before the multiplication

    Returns:
        Fused scores (G, P)
    """
    return (weights + alpha) * in_score
