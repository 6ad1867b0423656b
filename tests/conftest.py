"""
Pytest configuration and fixtures.
"""

import pytest
import numpy as np
import sys
import os

# Add repository root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def concrete_inputs():
    """Two gallery and two probe samples from a single camera."""
    return {
        'in_score': np.ones((2, 2)),
        'gal_cam_id': np.array([1, 1]),
        'gal_time': np.array([0.0, 10.0]),
        'prob_cam_id': np.array([1, 1]),
        'prob_time': np.array([0.0, 0.0]),
    }


@pytest.fixture
def concrete_params():
    """Hyperparameters matching concrete_inputs."""
    return {'num_cams': 1, 'tau': 5, 'sigma': 1, 'K': 1, 'alpha': 0}


@pytest.fixture
def random_inputs():
    """Three cameras, every gallery camera holding four samples."""
    rng = np.random.default_rng(7)
    num_gals, num_probs = 12, 15
    gal_cam_id = np.repeat([1, 2, 3], 4)
    rng.shuffle(gal_cam_id)
    return {
        'in_score': rng.random((num_gals, num_probs)),
        'gal_cam_id': gal_cam_id,
        'gal_time': rng.integers(0, 500, num_gals).astype(float),
        'prob_cam_id': rng.integers(1, 4, num_probs),
        'prob_time': rng.integers(0, 500, num_probs).astype(float),
    }


@pytest.fixture
def random_params():
    """Hyperparameters valid for random_inputs."""
    return {'num_cams': 3, 'tau': 100, 'sigma': 80, 'K': 3, 'alpha': 0.2}


@pytest.fixture
def lifting_config():
    """Sample YAML-style configuration."""
    return {
        'num_cams': 3,
        'tau': 50,
        'sigma': 120,
        'K': 4,
        'alpha': 0.1,
        'exclude_same_camera': True,
        'num_workers': 2,
    }
