"""
Temporal Lifting (TLift) of a gallery-probe score matrix.
=========================================================

Re-weights appearance scores with temporal co-occurrence evidence, as in
Liao and Shao, "Interpretable and Generalizable Person Re-Identification
with Query-Adaptive Convolution and Temporal Lifting", ECCV 2020.

Pipeline
--------
1. **Co-occurrence mask** over probe samples (|dt| < tau).
2. **Gallery partition** by camera, with per-camera time differences.
3. **Pivot selection** per (probe camera, gallery camera, probe sample):
   top-K threshold over the scores of co-occurring probe samples, ties kept.
4. **Temporal weight**: mean Gaussian kernel between each gallery sample
   and the pivots of its camera.
5. **Fusion**: ``(weight + alpha) * in_score``.

Each (probe camera, gallery camera) pair is an independent task writing a
disjoint block of the output, so tasks can run on a thread pool and be
gathered without locking.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from ..config import LiftingConfig
from ..errors import InvalidDimension, InvalidCameraIndex, NonFiniteValues
from ..utils.profiling import StageProfiler
from .cooccurrence import build_cooccurrence_mask
from .partition import GalleryPartition, partition_gallery, partition_probes
from .pivots import select_pivots
from .kernel import temporal_weights
from .fusion import fuse_scores

logger = logging.getLogger(__name__)


@dataclass
class PairTask:
    """Weighting work for one (probe camera, gallery camera) pair."""
    probe_camera: int
    probe_indices: np.ndarray    # global probe indices
    gallery: GalleryPartition

    @property
    def gallery_camera(self) -> int:
        return self.gallery.camera_id

    @property
    def shape(self) -> Tuple[int, int]:
        return self.gallery.size, len(self.probe_indices)


class TemporalLifter:
    """
    Applies temporal lifting with a fixed configuration.

    Usage:
        lifter = TemporalLifter(LiftingConfig(num_cams=6, tau=100, sigma=200, K=10))
        out_score = lifter.lift(in_score, gal_cam_id, gal_time, prob_cam_id, prob_time)
    """

    def __init__(self, config: LiftingConfig):
        self.config = config.validate()
        self.profiler = StageProfiler(enabled=config.profile)
        self.last_task_count = 0

        logger.info(
            "TemporalLifter: cams=%d tau=%.3g sigma=%.3g K=%d alpha=%.3g "
            "exclude_same_camera=%s workers=%d",
            config.num_cams, config.tau, config.sigma, config.K, config.alpha,
            config.exclude_same_camera, config.num_workers,
        )

    # ── public API ───────────────────────────────────────────────────────

    def lift(
        self,
        in_score: np.ndarray,
        gal_cam_id: np.ndarray,
        gal_time: np.ndarray,
        prob_cam_id: np.ndarray,
        prob_time: np.ndarray,
    ) -> np.ndarray:
        """
        Refine a gallery-probe score matrix.

        Args:
            in_score: Similarity scores (G, P), rows gallery, columns probe
            gal_cam_id: Camera id per gallery sample (G,)
            gal_time: Capture time per gallery sample (G,)
            prob_cam_id: Camera id per probe sample (P,)
            prob_time: Capture time per probe sample (P,)

        Returns:
            out_score (G, P)

        Raises:
            TLiftError subclasses on invalid input; no partial result is returned.
        """
        start = time.perf_counter()
        with self.profiler.stage('total'):
            weights = self.compute_weights(in_score, gal_cam_id, gal_time, prob_cam_id, prob_time)
            with self.profiler.stage('fusion'):
                out_score = fuse_scores(weights, np.asarray(in_score, dtype=np.float64),
                                        self.config.alpha)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Lifted {out_score.shape} scores over {self.last_task_count} camera pairs "
                    f"in {elapsed_ms:.1f} ms")
        if self.config.profile:
            logger.info(f"Stage timings (ms): {self.profiler.get_summary()}")
        return out_score

    def compute_weights(
        self,
        in_score: np.ndarray,
        gal_cam_id: np.ndarray,
        gal_time: np.ndarray,
        prob_cam_id: np.ndarray,
        prob_time: np.ndarray,
    ) -> np.ndarray:
        """
        Temporal weight matrix (G, P), before fusion.

        Cells of skipped blocks (same-camera pairs when excluded) stay 0.
        """
        cfg = self.config
        in_score, gal_cam_id, gal_time, prob_cam_id, prob_time = self.validate_inputs(
            in_score, gal_cam_id, gal_time, prob_cam_id, prob_time
        )

        with self.profiler.stage('cooccurrence'):
            cooccur_mask = build_cooccurrence_mask(prob_time, cfg.tau)

        with self.profiler.stage('partition'):
            gallery = partition_gallery(in_score, gal_cam_id, gal_time,
                                        cfg.num_cams, cfg.first_camera_id)
            probes = partition_probes(prob_cam_id, cfg.num_cams, cfg.first_camera_id)
            tasks = self.build_tasks(gallery, probes)
            self.last_task_count = len(tasks)

        with self.profiler.stage('pivots_and_weights'):
            weights = np.zeros(in_score.shape, dtype=np.float64)
            for g_idx, p_idx, block in self._run_tasks(tasks, cooccur_mask):
                weights[np.ix_(g_idx, p_idx)] = block

        logger.debug(f"Computed weights for {len(tasks)} camera pairs, shape={weights.shape}")
        return weights

    def build_tasks(
        self,
        gallery: List[GalleryPartition],
        probes: Dict[int, np.ndarray],
    ) -> List[PairTask]:
        """
        One task per (probe camera, gallery camera) pair with samples on both sides.
        """
        tasks = []
        for p_cam, p_idx in probes.items():
            if len(p_idx) == 0:
                continue
            for part in gallery:
                if part.is_empty:
                    continue
                if self.config.exclude_same_camera and p_cam == part.camera_id:
                    logger.debug(f"Skipping same-camera pair {p_cam}")
                    continue
                tasks.append(PairTask(probe_camera=p_cam, probe_indices=p_idx, gallery=part))
        return tasks

    def validate_inputs(self, in_score, gal_cam_id, gal_time, prob_cam_id, prob_time):
        """
        Coerce inputs to arrays and check shapes, finiteness and camera ids.

        Returns:
            (in_score, gal_cam_id, gal_time, prob_cam_id, prob_time) as
            float64 / int64 numpy arrays
        """
        gal_time = _as_vector('gal_time', gal_time).astype(np.float64)
        prob_time = _as_vector('prob_time', prob_time).astype(np.float64)
        num_gals, num_probs = len(gal_time), len(prob_time)

        in_score = np.asarray(in_score, dtype=np.float64)
        if in_score.shape != (num_gals, num_probs):
            raise InvalidDimension('in_score', (num_gals, num_probs), in_score.shape)

        gal_cam_id = _as_vector('gal_cam_id', gal_cam_id)
        if len(gal_cam_id) != num_gals:
            raise InvalidDimension('gal_cam_id', (num_gals,), gal_cam_id.shape)
        prob_cam_id = _as_vector('prob_cam_id', prob_cam_id)
        if len(prob_cam_id) != num_probs:
            raise InvalidDimension('prob_cam_id', (num_probs,), prob_cam_id.shape)

        for name, arr in (('in_score', in_score), ('gal_time', gal_time), ('prob_time', prob_time)):
            bad = int(np.count_nonzero(~np.isfinite(arr)))
            if bad:
                raise NonFiniteValues(name, bad)

        gal_cam_id = self._check_camera_ids('gallery', gal_cam_id)
        prob_cam_id = self._check_camera_ids('probe', prob_cam_id)

        return in_score, gal_cam_id, gal_time, prob_cam_id, prob_time

    # ── internals ────────────────────────────────────────────────────────

    def _check_camera_ids(self, side: str, cam_ids: np.ndarray) -> np.ndarray:
        cams = self.config.camera_ids
        lo, hi = cams[0], cams[-1]
        kind = cam_ids.dtype.kind

        if cam_ids.size == 0:
            return cam_ids.astype(np.int64)
        if kind in 'iu':
            bad = (cam_ids < lo) | (cam_ids > hi)
        elif kind == 'f':
            bad = ~np.isfinite(cam_ids)
            ok = ~bad
            bad[ok] = ((cam_ids[ok] != np.round(cam_ids[ok]))
                       | (cam_ids[ok] < lo) | (cam_ids[ok] > hi))
        else:
            # Non-numeric ids (strings, bools) are never valid camera indices
            bad = np.ones(cam_ids.shape, dtype=bool)

        if np.any(bad):
            raise InvalidCameraIndex(side, cam_ids[bad], (lo, hi))
        return cam_ids.astype(np.int64)

    def _run_tasks(self, tasks: List[PairTask], cooccur_mask: np.ndarray):
        def run_one(task):
            return self._weight_block(task, cooccur_mask)

        if self.config.num_workers > 1 and len(tasks) > 1:
            with ThreadPoolExecutor(max_workers=self.config.num_workers) as executor:
                return list(executor.map(run_one, tasks))
        return [run_one(task) for task in tasks]

    def _weight_block(
        self,
        task: PairTask,
        cooccur_mask: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Weights for one camera pair.

        Returns:
            (global gallery indices, global probe indices, block (Nc, np))
        """
        cfg = self.config
        p_idx = task.probe_indices
        part = task.gallery

        c_mask = cooccur_mask[np.ix_(p_idx, p_idx)]
        prob_score = part.scores[:, p_idx]

        block = np.empty(task.shape, dtype=np.float64)
        for i in range(len(p_idx)):
            mask_in_gal = select_pivots(
                prob_score, c_mask, i, cfg.K,
                probe_camera=task.probe_camera,
                gallery_camera=part.camera_id,
                probe_index=int(p_idx[i]),
            )
            block[:, i] = temporal_weights(part.time_diff, mask_in_gal, cfg.sigma)

        logger.debug(f"Pair p_cam={task.probe_camera} g_cam={part.camera_id}: block {block.shape}")
        return part.indices, p_idx, block


def _as_vector(name: str, values) -> np.ndarray:
    """Accept 1-D arrays and (N, 1) / (1, N) column or row vectors."""
    arr = np.asarray(values)
    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.reshape(-1)
    if arr.ndim != 1:
        raise InvalidDimension(name, ('N',), arr.shape)
    return arr


def tlift(
    in_score: np.ndarray,
    gal_cam_id: np.ndarray,
    gal_time: np.ndarray,
    prob_cam_id: np.ndarray,
    prob_time: np.ndarray,
    num_cams: int,
    tau: float = 100,
    sigma: float = 200,
    K: int = 10,
    alpha: float = 0.2,
    **options,
) -> np.ndarray:
    """
    Functional form of TemporalLifter.lift.

    Args:
        in_score: Similarity scores (G, P) between gallery (rows) and probe (columns)
        gal_cam_id: Camera id per gallery sample, 1-based by default
        gal_time: Time stamp per gallery sample
        prob_cam_id: Camera id per probe sample
        prob_time: Time stamp per probe sample
        num_cams: Number of cameras
        tau: Interval threshold defining nearby persons. Default: 100.
        sigma: Sensitivity to the time difference. Default: 200.
        K: Rank of the top retrievals defining the pivot set. Default: 10.
        alpha: Regularizer of the multiplicative fusion. Default: 0.2.
        **options: Remaining LiftingConfig fields (first_camera_id,
            exclude_same_camera, num_workers, profile)

    Returns:
        out_score (G, P)

    Comments:
        The default alpha suits sigmoid or re-ranking scores. Otherwise
        scores are best distributed in [0, 1].
    """
    config = LiftingConfig(num_cams=num_cams, tau=tau, sigma=sigma, K=K, alpha=alpha, **options)
    return TemporalLifter(config).lift(in_score, gal_cam_id, gal_time, prob_cam_id, prob_time)
