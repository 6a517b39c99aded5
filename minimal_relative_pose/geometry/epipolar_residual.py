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
import torch


def to_homogeneous(points: torch.Tensor) -> torch.Tensor:
    """
    Append a 1 to each 2D point.
    :param points: (B...)x2
    :return: (B...)x3
    """
    return torch.cat([points, torch.ones_like(points[..., 0:1])], dim=-1)


def orthographic_epipolar_residual(
    essential: torch.Tensor, points_a: torch.Tensor, points_b: torch.Tensor
) -> torch.Tensor:
    """
    Signed algebraic epipolar error for the orthographic model,
    [xa, ya, 1] E [xb, yb, 1]^T.
    For a sparse orthographic matrix this is a xa + b ya + c xb + d yb + e.

    To score a set of K candidates against N points, give essential as (B...)xKx3x3
    and the points as (B...)x1xNx2.

    :param essential: A (B...)x3x3 matrix
    :param points_a: (B...)xNx2 points in the first view
    :param points_b: (B...)xNx2 points in the second view
    :return: A (B...)xN tensor of residuals
    """
    homogeneous_a = to_homogeneous(points_a)
    homogeneous_b = to_homogeneous(points_b)
    return ((homogeneous_a @ essential) * homogeneous_b).sum(dim=-1)


def bearing_epipolar_residual(
    essential: torch.Tensor, bearings_a: torch.Tensor, bearings_b: torch.Tensor
) -> torch.Tensor:
    """
    Signed algebraic epipolar error between calibrated bearing vectors, b_b^T E b_a.
    Broadcasts the same way as orthographic_epipolar_residual.

    :param essential: A (B...)x3x3 matrix
    :param bearings_a: (B...)xNx3 unit bearings in the first view
    :param bearings_b: (B...)xNx3 unit bearings in the second view
    :return: A (B...)xN tensor of residuals
    """
    return ((bearings_b @ essential) * bearings_a).sum(dim=-1)
