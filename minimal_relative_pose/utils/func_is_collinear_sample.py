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


def is_collinear_sample(points: torch.Tensor, tolerance: float = 0.0) -> torch.Tensor:
    """
    Check if the three points of a minimal sample lie on a line,
    by the magnitude of the cross product of the two edges from the first point
    (twice the area of the triangle).
    The orthographic solver divides by that cross product.
    :param points: (B...)x3x2 image points
    :param tolerance: Largest magnitude of the cross product to count as collinear
    :return: (B...) boolean tensor
    """
    edge_1 = points[..., 1, :] - points[..., 0, :]
    edge_2 = points[..., 2, :] - points[..., 0, :]
    cross = edge_1[..., 0] * edge_2[..., 1] - edge_1[..., 1] * edge_2[..., 0]
    return cross.abs() <= tolerance
