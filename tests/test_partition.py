"""
Tests for camera partitioning.
"""

import pytest
import numpy as np

from tlift.lifting import partition_gallery, partition_probes, camera_range


class TestPartitionGallery:
    """Tests for partition_gallery."""

    def test_unsorted_camera_ids(self):
        in_score = np.arange(10, dtype=float).reshape(5, 2)
        gal_cam_id = np.array([2, 1, 2, 3, 1])
        gal_time = np.array([10, 20, 30, 40, 50])

        parts = partition_gallery(in_score, gal_cam_id, gal_time, num_cams=3)

        assert [p.camera_id for p in parts] == [1, 2, 3]
        np.testing.assert_array_equal(parts[0].indices, [1, 4])
        np.testing.assert_array_equal(parts[1].indices, [0, 2])
        np.testing.assert_array_equal(parts[2].indices, [3])
        np.testing.assert_array_equal(parts[1].scores, in_score[[0, 2]])
        np.testing.assert_array_equal(parts[0].times, [20, 50])

    def test_time_diff(self):
        parts = partition_gallery(np.ones((2, 1)), np.array([1, 1]), np.array([0, 10]), num_cams=1)
        np.testing.assert_array_equal(parts[0].time_diff, [[0, -10], [10, 0]])

    def test_partition_completeness(self):
        rng = np.random.default_rng(0)
        num_gals = 40
        gal_cam_id = rng.integers(1, 6, num_gals)
        parts = partition_gallery(rng.random((num_gals, 3)), gal_cam_id, rng.random(num_gals), num_cams=5)

        all_indices = np.concatenate([p.indices for p in parts])
        assert len(all_indices) == num_gals
        assert len(np.unique(all_indices)) == num_gals
        np.testing.assert_array_equal(np.sort(all_indices), np.arange(num_gals))

    def test_empty_camera(self):
        parts = partition_gallery(np.ones((2, 2)), np.array([1, 1]), np.array([0, 1]), num_cams=2)
        assert parts[1].is_empty
        assert parts[1].scores.shape == (0, 2)
        assert parts[1].time_diff.shape == (0, 0)

    def test_out_of_range_ids_are_dropped(self):
        parts = partition_gallery(np.ones((3, 1)), np.array([1, 7, 2]), np.zeros(3), num_cams=2)
        assert sum(p.size for p in parts) == 2

    def test_zero_based_ids(self):
        parts = partition_gallery(np.ones((3, 1)), np.array([0, 1, 0]), np.zeros(3),
                                  num_cams=2, first_camera_id=0)
        assert [p.camera_id for p in parts] == [0, 1]
        np.testing.assert_array_equal(parts[0].indices, [0, 2])


class TestPartitionProbes:
    """Tests for partition_probes."""

    def test_indices_per_camera(self):
        probes = partition_probes(np.array([3, 1, 1, 3]), num_cams=3)
        np.testing.assert_array_equal(probes[1], [1, 2])
        assert len(probes[2]) == 0
        np.testing.assert_array_equal(probes[3], [0, 3])

    def test_camera_range(self):
        assert list(camera_range(3)) == [1, 2, 3]
        assert list(camera_range(2, first_camera_id=0)) == [0, 1]
