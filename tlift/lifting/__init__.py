"""
Temporal lifting module.
Re-weights gallery-probe appearance scores with temporal co-occurrence.
"""

from .cooccurrence import build_cooccurrence_mask, pairwise_time_diff
from .partition import GalleryPartition, partition_gallery, partition_probes, camera_range
from .pivots import select_pivots, kth_largest
from .kernel import gaussian_kernel, temporal_weights
from .fusion import fuse_scores
from .lifter import TemporalLifter, PairTask, tlift


__all__ = [
    # Stages
    'build_cooccurrence_mask',
    'pairwise_time_diff',
    'GalleryPartition',
    'partition_gallery',
    'partition_probes',
    'camera_range',
    'select_pivots',
    'kth_largest',
    'gaussian_kernel',
    'temporal_weights',
    'fuse_scores',
    # Orchestration
    'TemporalLifter',
    'PairTask',
    'tlift',
]
