# Copyright (C) 2024  John Skinner
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or (at your option) any later version.
#
# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301
# USA
import unittest
import math
import torch
from minimal_relative_pose.utils import (
    finite_candidate_mask,
    is_collinear_sample,
    normalise_candidates,
)


class TestFiniteCandidateMask(unittest.TestCase):
    def test_all_finite(self):
        candidates = torch.ones(2, 3, 3)
        self.assertTrue(torch.equal(finite_candidate_mask(candidates), torch.tensor([True, True])))

    def test_single_nan_entry_rejects_candidate(self):
        candidates = torch.zeros(4, 2, 3, 3)
        candidates[1, 0, 2, 2] = math.nan
        candidates[3, 1, 0, 2] = math.inf
        mask = finite_candidate_mask(candidates)
        self.assertEqual(mask.shape, (4, 2))
        self.assertTrue(
            torch.equal(
                mask,
                torch.tensor([[True, True], [False, True], [True, True], [True, False]]),
            )
        )


class TestNormaliseCandidates(unittest.TestCase):
    def test_scales_to_unit_norm(self):
        candidates = torch.tensor(
            [
                [[0.0, 0.0, 3.0], [0.0, 0.0, 0.0], [0.0, 4.0, 0.0]],
                [[0.0, 2.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]],
            ]
        )
        result = normalise_candidates(candidates)
        self.assertTrue(
            torch.isclose(torch.linalg.matrix_norm(result), torch.ones(2)).all()
        )
        self.assertAlmostEqual(float(result[0, 0, 2]), 0.6)
        self.assertAlmostEqual(float(result[0, 2, 1]), 0.8)
        self.assertEqual(float(result[1, 0, 1]), 1.0)

    def test_nan_stays_nan(self):
        candidates = torch.full((3, 3), math.nan)
        self.assertTrue(torch.isnan(normalise_candidates(candidates)).all())


class TestIsCollinearSample(unittest.TestCase):
    def test_triangle_is_not_collinear(self):
        points = torch.tensor([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
        self.assertFalse(bool(is_collinear_sample(points)))

    def test_points_on_a_line(self):
        points = torch.tensor(
            [
                [[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]],
                [[1.0, 3.0], [1.0, -2.0], [1.0, 7.0]],
                [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]],
            ]
        )
        self.assertTrue(
            torch.equal(is_collinear_sample(points), torch.tensor([True, True, False]))
        )

    def test_repeated_point_is_collinear(self):
        points = torch.tensor([[0.5, 0.5], [0.5, 0.5], [3.0, -1.0]])
        self.assertTrue(bool(is_collinear_sample(points)))

    def test_tolerance(self):
        points = torch.tensor([[0.0, 0.0], [1.0, 0.0], [2.0, 1e-3]])
        self.assertFalse(bool(is_collinear_sample(points)))
        self.assertTrue(bool(is_collinear_sample(points, tolerance=1e-2)))
