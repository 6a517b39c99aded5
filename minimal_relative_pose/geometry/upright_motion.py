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
from .skew_symmetric import skew_symmetric


def yaw_rotation_matrix(yaw: torch.Tensor) -> torch.Tensor:
    """
    Rotation about the camera y axis, which is taken to be the known vertical.
    :param yaw: A (B...) tensor of angles, in radians
    :return: A (B...)x3x3 rotation matrix
    """
    cos_yaw = torch.cos(yaw)
    sin_yaw = torch.sin(yaw)
    zero = torch.zeros_like(yaw)
    one = torch.ones_like(yaw)
    return torch.stack(
        [cos_yaw, zero, sin_yaw, zero, one, zero, -sin_yaw, zero, cos_yaw], dim=-1
    ).reshape(*yaw.shape, 3, 3)


def upright_essential_from_motion(
    yaw: torch.Tensor, translation: torch.Tensor
) -> torch.Tensor:
    """
    Build the essential matrix E = [t]x R for a camera that rotates about the vertical
    and moves within the horizontal plane.
    Points in the second camera are X_b = R X_a + t, so that b_b^T E b_a = 0 for bearings b_a and b_b.

    When the y component of the translation is zero, E has the upright sparsity pattern,
    with non-zero entries only at (0, 1), (1, 0), (1, 2) and (2, 1).

    :param yaw: A (B...) tensor of rotation angles about y
    :param translation: A (B...)x3 tensor of translations. The y component should be zero.
    :return: A (B...)x3x3 essential matrix, not normalised.
    """
    return skew_symmetric(translation) @ yaw_rotation_matrix(yaw)
