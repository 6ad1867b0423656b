"""
Configuration for temporal lifting.
Hyperparameters plus runtime options, loadable from a dict or YAML.
"""

import math
import numbers
import logging
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

import yaml

from .errors import InvalidParameter

logger = logging.getLogger(__name__)


@dataclass
class LiftingConfig:
    """Configuration for a TemporalLifter."""
    num_cams: int

    # Hyperparameters
    tau: float = 100.0     # co-occurrence interval
    sigma: float = 200.0   # kernel bandwidth, inf disables the time penalty
    K: int = 10            # rank of the pivot threshold
    alpha: float = 0.2     # fusion regularizer

    # Camera numbering
    first_camera_id: int = 1

    # Leave probe/gallery pairs from the same camera unweighted
    exclude_same_camera: bool = False

    # Runtime
    num_workers: int = 1
    profile: bool = False

    def validate(self) -> 'LiftingConfig':
        """
        Check every field against its domain.

        Returns:
            self, for chaining

        Raises:
            InvalidParameter: on the first invalid field
        """
        if not _is_int(self.num_cams) or self.num_cams < 1:
            raise InvalidParameter('num_cams', self.num_cams, 'must be a positive integer')
        if not _is_real(self.tau) or not self.tau > 0:
            raise InvalidParameter('tau', self.tau, 'must be positive')
        if not _is_real(self.sigma) or not self.sigma > 0:
            raise InvalidParameter('sigma', self.sigma, 'must be positive (inf allowed)')
        if not _is_int(self.K) or self.K < 1:
            raise InvalidParameter('K', self.K, 'must be a positive integer')
        if not _is_real(self.alpha) or not math.isfinite(self.alpha):
            raise InvalidParameter('alpha', self.alpha, 'must be finite')
        if not _is_int(self.first_camera_id):
            raise InvalidParameter('first_camera_id', self.first_camera_id, 'must be an integer')
        if not _is_int(self.num_workers) or self.num_workers < 1:
            raise InvalidParameter('num_workers', self.num_workers, 'must be >= 1')
        for name in ('exclude_same_camera', 'profile'):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidParameter(name, value, 'must be a boolean')
        return self

    @property
    def camera_ids(self) -> range:
        return range(self.first_camera_id, self.first_camera_id + self.num_cams)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'LiftingConfig':
        """
        Create a config from a plain dict.

        Expected format:
        {
            'num_cams': 6,
            'tau': 100, 'sigma': 200, 'K': 10, 'alpha': 0.2,
            'first_camera_id': 1,
            'exclude_same_camera': False,
            'num_workers': 4
        }
        Unknown keys are ignored with a warning.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {unknown}")
        if 'num_cams' not in config:
            raise InvalidParameter('num_cams', None, 'missing from config')

        params = {k: v for k, v in config.items() if k in known}
        if 'sigma' in params:
            params['sigma'] = float(params['sigma'])
        return cls(**params)

    @classmethod
    def from_yaml(cls, path: str, overrides: Optional[Dict[str, Any]] = None) -> 'LiftingConfig':
        """
        Load a config from a YAML file.

        Reads the ``tlift:`` section when present, else the whole document.
        ``overrides`` entries that are not None replace file values.
        """
        with open(path, 'r') as f:
            doc = yaml.safe_load(f) or {}
        section = doc.get('tlift', doc)
        if overrides:
            section = dict(section)
            section.update({k: v for k, v in overrides.items() if v is not None})
        logger.debug(f"Loaded config from {path}")
        return cls.from_dict(section)


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return (isinstance(value, numbers.Real) and not isinstance(value, bool)
            and not math.isnan(value))
