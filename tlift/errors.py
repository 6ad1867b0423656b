"""
Typed failures raised by the temporal lifting pipeline.
All of them are input errors: the computation is deterministic, so none
of them is worth retrying.
"""

from typing import Optional, Sequence

import numpy as np


class TLiftError(ValueError):
    """Base class for every temporal lifting failure."""


class InvalidDimension(TLiftError):
    """An input vector or matrix does not match the gallery/probe sizes."""

    def __init__(self, name: str, expected: tuple, actual: tuple):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"{name}: expected shape {expected}, got {actual}")


class InvalidCameraIndex(TLiftError):
    """A camera id lies outside the configured camera range."""

    def __init__(self, side: str, bad_ids: Sequence[int], valid_range: tuple):
        self.side = side
        self.bad_ids = np.unique(np.asarray(bad_ids)).tolist()
        self.valid_range = valid_range
        lo, hi = valid_range
        super().__init__(
            f"{side} camera ids {self.bad_ids} outside [{lo}, {hi}]"
        )


class InsufficientPivotCandidates(TLiftError):
    """The co-occurrence score pool of a probe sample holds fewer than K scores."""

    def __init__(
        self,
        probe_camera: int,
        gallery_camera: int,
        probe_index: int,
        pool_size: int,
        K: int,
    ):
        self.probe_camera = probe_camera
        self.gallery_camera = gallery_camera
        self.probe_index = probe_index
        self.pool_size = pool_size
        self.K = K
        super().__init__(
            f"probe sample {probe_index} (camera {probe_camera}) has only "
            f"{pool_size} candidate scores in gallery camera {gallery_camera}, "
            f"K={K}"
        )


class InvalidParameter(TLiftError):
    """A hyperparameter or runtime option is out of its domain."""

    def __init__(self, name: str, value, reason: Optional[str] = None):
        self.name = name
        self.value = value
        msg = f"invalid {name}={value!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class NonFiniteValues(TLiftError):
    """An input array contains NaN or infinite entries."""

    def __init__(self, name: str, count: int):
        self.name = name
        self.count = count
        super().__init__(f"{name} has {count} non-finite entries")
