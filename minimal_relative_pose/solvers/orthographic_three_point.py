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
import logging
from typing import NamedTuple
import torch
import torch.nn as nn

from minimal_relative_pose.types import MinimalSample
from minimal_relative_pose.utils import is_collinear_sample


class OrthographicAffineCoefficients(NamedTuple):
    """
    The affine relationship between the triangles in each view.
    The epipolar constraint for points 1 and 2 forces
    a = aac * c + aad * d and b = bbc * c + bbd * d.
    """
    denominator: torch.Tensor
    aac: torch.Tensor
    aad: torch.Tensor
    bbc: torch.Tensor
    bbd: torch.Tensor


def orthographic_affine_coefficients(
    points_a: torch.Tensor, points_b: torch.Tensor
) -> OrthographicAffineCoefficients:
    """
    Solve the two linear epipolar constraints from the edges of each triangle, by Cramer's rule.
    The denominator is the cross product of the edges in view a, which is zero when
    the points in view a are collinear. It is not checked, the coefficients become non-finite.
    :param points_a: (B...)x3x2
    :param points_b: (B...)x3x2
    :return: Each coefficient as a (B...) tensor
    """
    xd1 = points_a[..., 1, :] - points_a[..., 0, :]
    yd1 = points_a[..., 2, :] - points_a[..., 0, :]
    xd2 = points_b[..., 1, :] - points_b[..., 0, :]
    yd2 = points_b[..., 2, :] - points_b[..., 0, :]
    denominator = xd1[..., 0] * yd1[..., 1] - xd1[..., 1] * yd1[..., 0]
    return OrthographicAffineCoefficients(
        denominator=denominator,
        aac=(xd1[..., 1] * yd2[..., 0] - xd2[..., 0] * yd1[..., 1]) / denominator,
        aad=(xd1[..., 1] * yd2[..., 1] - xd2[..., 1] * yd1[..., 1]) / denominator,
        bbc=(xd2[..., 0] * yd1[..., 0] - xd1[..., 0] * yd2[..., 0]) / denominator,
        bbd=(xd2[..., 1] * yd1[..., 0] - xd1[..., 0] * yd2[..., 1]) / denominator,
    )


def orthographic_three_point_essential(
    points_a: torch.Tensor, points_b: torch.Tensor
) -> torch.Tensor:
    """
    Relative pose of two orthographic cameras from three point correspondences.
    Based on M. Oskarsson, "Two-View Orthographic Epipolar Geometry: Minimal and Optimal Solvers",
    Journal of Mathematical Imaging and Vision, 2017.

    An orthographic essential matrix has the form [[0, 0, a], [0, 0, b], [c, d, e]],
    with a xa + b ya + c xb + d yb + e = 0 for each correspondence.
    Along with the three constraints from the points, the solution satisfies
    a^2 + b^2 = c^2 + d^2 = 1, which gives a quadratic in d^2 with two roots.

    There are always exactly two candidates, in the order of the roots (d4_2 + sqrt(disc), d4_2 - sqrt(disc)).
    Nothing is validated; degenerate samples (collinear points in view a, negative discriminant,
    zero denominators) produce NaN or Inf entries, which the caller should filter
    (see finite_candidate_mask). The top-left 2x2 block is always exactly zero.

    :param points_a: (B...)x3x2 image points in the first view. Row 0 is the reference point.
    :param points_b: (B...)x3x2 corresponding image points in the second view.
    :return: A new (B...)x2x3x3 tensor of candidate essential matrices.
    """
    coefficients = orthographic_affine_coefficients(points_a, points_b)
    aac = coefficients.aac
    aad = coefficients.aad
    bbc = coefficients.bbc
    bbd = coefficients.bbd
    aac_sq = aac * aac

    # Coefficients of the constraint dd_0 + dd_1c * c * d + dd_2 * d^2 = 0
    dd_2 = -aac_sq + aad * aad - bbc * bbc + bbd * bbd
    dd_1c = 2.0 * aac * aad + 2.0 * bbc * bbd
    dd_0 = aac_sq + bbc * bbc - 1.0
    # Squaring it and substituting c^2 = 1 - d^2 leaves only even powers of d
    d4_4 = dd_1c * dd_1c + dd_2 * dd_2
    d4_2 = -dd_1c * dd_1c + 2.0 * dd_0 * dd_2
    d4_0 = dd_0 * dd_0
    discriminant_root = torch.sqrt(d4_2 * d4_2 - 4.0 * d4_4 * d4_0)

    # Add a candidate dimension to everything, so both roots are solved together.
    roots = torch.stack([d4_2 + discriminant_root, d4_2 - discriminant_root], dim=-1)
    aac = aac.unsqueeze(-1)
    aad = aad.unsqueeze(-1)
    bbc = bbc.unsqueeze(-1)
    bbd = bbd.unsqueeze(-1)
    aac_sq = aac_sq.unsqueeze(-1)
    dd_2 = dd_2.unsqueeze(-1)

    dsol = torch.sqrt(-roots / d4_4.unsqueeze(-1) / 2.0)
    csol = -(dd_2 * dsol * dsol + aac_sq + bbc * bbc - 1.0) / (
        2.0 * aac * aad * dsol + 2.0 * bbc * bbd * dsol
    )
    asol = aac * csol + aad * dsol
    bsol = bbc * csol + bbd * dsol
    # The remaining entry comes from the constraint on the reference point
    reference_a = points_a[..., 0:1, :]
    reference_b = points_b[..., 0:1, :]
    esol = (
        -asol * reference_a[..., 0]
        - bsol * reference_a[..., 1]
        - csol * reference_b[..., 0]
        - dsol * reference_b[..., 1]
    )

    zero = torch.zeros_like(asol)
    return torch.stack(
        [zero, zero, asol, zero, zero, bsol, csol, dsol, esol], dim=-1
    ).reshape(*asol.shape, 3, 3)


class OrthographicThreePointSolver(nn.Module):
    """
    Module wrapper around orthographic_three_point_essential, for use inside a sampling loop.
    Produces two candidates per sample.
    """

    def __init__(self, warn_on_degenerate: bool = False, collinear_tolerance: float = 0.0):
        """
        :param warn_on_degenerate: Log a warning when any sample in the batch has collinear points in view a.
        The candidates are still returned, and will contain non-finite values.
        :param collinear_tolerance: Cross product magnitude below which the points count as collinear,
        only used for the warning.
        """
        super().__init__()
        self.warn_on_degenerate = bool(warn_on_degenerate)
        self.collinear_tolerance = float(collinear_tolerance)

    @property
    def num_candidates(self) -> int:
        return 2

    def forward(self, points_a: torch.Tensor, points_b: torch.Tensor) -> torch.Tensor:
        if self.warn_on_degenerate:
            num_collinear = int(
                is_collinear_sample(points_a, self.collinear_tolerance).sum()
            )
            if num_collinear > 0:
                logging.getLogger(__name__).warning(
                    f"{num_collinear} orthographic samples have collinear points, "
                    f"their candidates will not be finite"
                )
        return orthographic_three_point_essential(points_a, points_b)

    def solve_sample(self, sample: MinimalSample) -> torch.Tensor:
        return self(sample.points_a, sample.points_b)
