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
import torch.nn as nn

from minimal_relative_pose.linalg import (
    ISymmetricEigenSolver,
    TorchSymmetricEigenSolver,
)
from minimal_relative_pose.types import MinimalSample

_default_eigen_solver = TorchSymmetricEigenSolver()


def upright_action_matrix(
    bearings_a: torch.Tensor, bearings_b: torch.Tensor
) -> torch.Tensor:
    """
    One row per correspondence, [a_x b_y, -a_z b_y, -b_x a_y, -b_z a_y],
    so that A n = 0 for the four unknown entries n of the upright essential matrix.
    :param bearings_a: (B...)x3x3, one bearing per row
    :param bearings_b: (B...)x3x3
    :return: (B...)x3x4
    """
    a_x = bearings_a[..., 0]
    a_y = bearings_a[..., 1]
    a_z = bearings_a[..., 2]
    b_x = bearings_b[..., 0]
    b_y = bearings_b[..., 1]
    b_z = bearings_b[..., 2]
    return torch.stack([a_x * b_y, -a_z * b_y, -b_x * a_y, -b_z * a_y], dim=-1)


def upright_three_point_essential(
    bearings_a: torch.Tensor,
    bearings_b: torch.Tensor,
    eigen_solver: ISymmetricEigenSolver | None = None,
) -> torch.Tensor:
    """
    Relative pose between two calibrated cameras that share a known vertical axis (y),
    and translate within the horizontal plane.
    The essential matrix then has only four non-zero entries:
    [[0, n2, 0], [-n0, 0, n1], [0, n3, 0]]
    Each correspondence gives one linear equation in n, so three correspondences
    determine n up to scale as the null space of the 3x4 action matrix A.

    The null space is the eigenvector of A^T A with the smallest eigenvalue.
    The returned matrix has unit Frobenius norm, and satisfies b_b^T E b_a = 0.
    Degenerate samples are not detected.

    :param bearings_a: (B...)x3x3 unit bearings in the first view, one per row
    :param bearings_b: (B...)x3x3 corresponding unit bearings in the second view
    :param eigen_solver: Decomposition to use, must return eigenvalues in ascending order.
    Defaults to torch.linalg.eigh.
    :return: A new (B...)x1x3x3 tensor holding the single candidate
    """
    if eigen_solver is None:
        eigen_solver = _default_eigen_solver
    action_matrix = upright_action_matrix(bearings_a, bearings_b)
    normal_matrix = action_matrix.transpose(-2, -1) @ action_matrix
    _, eigenvectors = eigen_solver.decompose(normal_matrix)
    null_space = eigenvectors[..., :, 0]

    n0 = null_space[..., 0]
    n1 = null_space[..., 1]
    n2 = null_space[..., 2]
    n3 = null_space[..., 3]
    zero = torch.zeros_like(n0)
    essential = torch.stack(
        [zero, n2, zero, -n0, zero, n1, zero, n3, zero], dim=-1
    ).reshape(*n0.shape, 3, 3)
    return essential.unsqueeze(-3)


class UprightThreePointSolver(nn.Module):
    """
    Module wrapper around upright_three_point_essential.
    Produces one candidate per sample.
    """

    def __init__(self, eigen_solver: ISymmetricEigenSolver | None = None):
        super().__init__()
        if eigen_solver is None:
            eigen_solver = _default_eigen_solver
        self.eigen_solver = eigen_solver

    @property
    def num_candidates(self) -> int:
        return 1

    def forward(self, bearings_a: torch.Tensor, bearings_b: torch.Tensor) -> torch.Tensor:
        return upright_three_point_essential(
            bearings_a, bearings_b, eigen_solver=self.eigen_solver
        )

    def solve_sample(self, sample: MinimalSample) -> torch.Tensor:
        return self(sample.points_a, sample.points_b)
