"""
Pivot selection for one probe sample.

The pivot set of a probe sample, within one gallery camera, is every gallery
sample that ranks in the top K for at least one probe sample co-occurring
with it. The threshold is the K-th largest score of the pooled block and
every score tied with it is kept, so the pivot set can exceed K rows.
"""

from typing import Optional

import numpy as np

from ..errors import InsufficientPivotCandidates


def kth_largest(values: np.ndarray, K: int) -> float:
    """
    K-th largest entry (1-indexed) of an array, ties counted separately.

    Equivalent to sorting descending and reading rank K.
    """
    flat = np.asarray(values).ravel()
    pos = flat.size - K
    return float(np.partition(flat, pos)[pos])


def select_pivots(
    prob_score: np.ndarray,
    c_mask: np.ndarray,
    i: int,
    K: int,
    probe_camera: Optional[int] = None,
    gallery_camera: Optional[int] = None,
    probe_index: Optional[int] = None,
) -> np.ndarray:
    """
    Select the pivot gallery samples for local probe sample ``i``.

    Args:
        prob_score: Gallery scores of one camera restricted to the probe
            camera's columns (Nc, np)
        c_mask: Co-occurrence mask among the probe camera's samples (np, np)
        i: Local probe index (column of prob_score)
        K: Rank of the threshold score
        probe_camera, gallery_camera, probe_index: Context reported when
            the candidate pool is too small

    Returns:
        Boolean mask_in_gal (Nc,) marking pivot rows

    Raises:
        InsufficientPivotCandidates: if the pooled block has fewer than K scores
    """
    cooccur_index = np.flatnonzero(c_mask[:, i])
    cooccur_score = prob_score[:, cooccur_index]

    if cooccur_score.size < K:
        raise InsufficientPivotCandidates(
            probe_camera=probe_camera,
            gallery_camera=gallery_camera,
            probe_index=probe_index if probe_index is not None else i,
            pool_size=int(cooccur_score.size),
            K=K,
        )

    thr = kth_largest(cooccur_score, K)
    return np.any(cooccur_score >= thr, axis=1)
