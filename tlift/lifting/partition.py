"""
Camera partitioning of the gallery and probe sets.

Index spaces used across the lifting package:
- global gallery index: row of ``in_score``
- local gallery index: row inside one ``GalleryPartition``
- global probe index: column of ``in_score``
- local probe index: position inside one probe camera's index array
Conversions happen only through the ``indices`` arrays built here.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from .cooccurrence import pairwise_time_diff

logger = logging.getLogger(__name__)


@dataclass
class GalleryPartition:
    """Gallery samples captured by one camera."""
    camera_id: int
    indices: np.ndarray     # global gallery indices, ascending
    scores: np.ndarray      # (Nc, P) rows of in_score
    times: np.ndarray       # (Nc,)
    time_diff: np.ndarray   # (Nc, Nc) signed, times[a] - times[b]

    @property
    def size(self) -> int:
        return len(self.indices)

    @property
    def is_empty(self) -> bool:
        return self.size == 0


def camera_range(num_cams: int, first_camera_id: int = 1) -> range:
    """Camera ids iterated by the lifter, e.g. 1..num_cams."""
    return range(first_camera_id, first_camera_id + num_cams)


def partition_gallery(
    in_score: np.ndarray,
    gal_cam_id: np.ndarray,
    gal_time: np.ndarray,
    num_cams: int,
    first_camera_id: int = 1,
) -> List[GalleryPartition]:
    """
    Split the gallery by camera and precompute each camera's time differences.

    Membership is found by filtering, so ``gal_cam_id`` need not be sorted.
    Samples whose camera id lies outside the camera range belong to no
    partition; the lifter rejects such inputs before calling this.

    Args:
        in_score: Score matrix (G, P)
        gal_cam_id: Camera id per gallery sample (G,)
        gal_time: Capture time per gallery sample (G,)
        num_cams: Number of cameras
        first_camera_id: Id of the first camera (1 for 1-based ids)

    Returns:
        One GalleryPartition per camera, in camera order
    """
    gal_cam_id = np.asarray(gal_cam_id).ravel()
    gal_time = np.asarray(gal_time, dtype=np.float64).ravel()

    partitions = []
    for cam in camera_range(num_cams, first_camera_id):
        indices = np.flatnonzero(gal_cam_id == cam)
        times = gal_time[indices]
        partitions.append(GalleryPartition(
            camera_id=cam,
            indices=indices,
            scores=in_score[indices, :],
            times=times,
            time_diff=pairwise_time_diff(times),
        ))
        logger.debug(f"Gallery camera {cam}: {len(indices)} samples")

    return partitions


def partition_probes(
    prob_cam_id: np.ndarray,
    num_cams: int,
    first_camera_id: int = 1,
) -> Dict[int, np.ndarray]:
    """
    Global probe indices per probe camera.

    Returns:
        Mapping camera id -> ascending global probe indices
    """
    prob_cam_id = np.asarray(prob_cam_id).ravel()
    return {
        cam: np.flatnonzero(prob_cam_id == cam)
        for cam in camera_range(num_cams, first_camera_id)
    }
