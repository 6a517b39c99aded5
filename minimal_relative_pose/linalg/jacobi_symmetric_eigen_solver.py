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
import warnings
import torch
from .i_symmetric_eigen_solver import ISymmetricEigenSolver
from .sort_eigen_decomposition import sort_eigen_decomposition


class JacobiSymmetricEigenSolver(ISymmetricEigenSolver):
    """
    Cyclic Jacobi eigenvalue algorithm, vectorised over the batch dimensions.

    Each rotation zeroes one off-diagonal element, and one sweep visits every pair (p, q)
    above the diagonal once. Convergence is quadratic once the off-diagonal elements are small,
    so only a few sweeps are needed for the 4x4 matrices the upright solver produces.
    See Numerical Recipes, section 11.1, for the choice of rotation angle.
    """

    def __init__(self, max_sweeps: int = 16, tolerance: float | None = None):
        """
        :param max_sweeps: Maximum number of sweeps over all the off-diagonal elements
        :param tolerance: Converged when the off-diagonal norm is below this fraction of the matrix norm.
        If None, scales with the machine epsilon of the input dtype.
        """
        max_sweeps = int(max_sweeps)
        if max_sweeps < 1:
            warnings.warn(
                f"The Jacobi eigen solver needs at least one sweep, got {max_sweeps}. Using 1 instead"
            )
            max_sweeps = 1
        self.max_sweeps = max_sweeps
        self.tolerance = None if tolerance is None else float(tolerance)

    def decompose(self, matrix: torch.Tensor) -> tuple[torch.Tensor, torch.Tensor]:
        size = matrix.size(-1)
        scale = torch.linalg.matrix_norm(matrix)
        tolerance = self.tolerance
        if tolerance is None:
            tolerance = 10.0 * size * torch.finfo(matrix.dtype).eps
        diagonalised = matrix.clone()
        eigenvectors = (
            torch.eye(size, dtype=matrix.dtype, device=matrix.device)
            .expand_as(matrix)
            .clone()
        )
        num_sweeps = 0
        converged = self._is_converged(diagonalised, scale, tolerance)
        while not converged and num_sweeps < self.max_sweeps:
            for p in range(size - 1):
                for q in range(p + 1, size):
                    rotation = self._jacobi_rotation(diagonalised, p, q)
                    diagonalised = rotation.transpose(-2, -1) @ diagonalised @ rotation
                    eigenvectors = eigenvectors @ rotation
            num_sweeps += 1
            converged = self._is_converged(diagonalised, scale, tolerance)
        if not converged:
            logging.getLogger(__name__).warning(
                f"Jacobi eigen decomposition did not converge after {num_sweeps} sweeps, "
                f"the eigenvectors may be inaccurate"
            )
        eigenvalues = torch.diagonal(diagonalised, dim1=-2, dim2=-1)
        # Non-finite matrices give non-finite eigenvectors, rather than the starting identity.
        is_finite = torch.isfinite(matrix).all(dim=-1).all(dim=-1)
        eigenvectors = torch.where(
            is_finite[..., None, None], eigenvectors, torch.full_like(eigenvectors, torch.nan)
        )
        eigenvalues = torch.where(
            is_finite[..., None], eigenvalues, torch.full_like(eigenvalues, torch.nan)
        )
        return sort_eigen_decomposition(eigenvalues, eigenvectors)

    @staticmethod
    def _is_converged(
        diagonalised: torch.Tensor, scale: torch.Tensor, tolerance: float
    ) -> bool:
        off_diagonal = diagonalised - torch.diag_embed(
            torch.diagonal(diagonalised, dim1=-2, dim2=-1)
        )
        off_diagonal_norm = torch.linalg.matrix_norm(off_diagonal)
        # Non-finite matrices will never converge, don't keep iterating on them.
        is_done = torch.logical_or(
            off_diagonal_norm <= tolerance * scale,
            torch.logical_not(torch.isfinite(off_diagonal_norm)),
        )
        return bool(is_done.all())

    @staticmethod
    def _jacobi_rotation(matrix: torch.Tensor, p: int, q: int) -> torch.Tensor:
        """
        Build the rotation R such that (R^T A R)[p, q] == 0.
        :param matrix: The (B...)xNxN matrix being diagonalised
        :param p: Row of the element to eliminate
        :param q: Column of the element to eliminate, q > p
        :return: A (B...)xNxN rotation matrix
        """
        a_pp = matrix[..., p, p]
        a_qq = matrix[..., q, q]
        a_pq = matrix[..., p, q]
        is_zero = a_pq == 0.0
        safe_a_pq = torch.where(is_zero, torch.ones_like(a_pq), a_pq)
        theta = (a_qq - a_pp) / (2.0 * safe_a_pq)
        # Smaller root of t^2 + 2 theta t - 1 = 0, written to avoid cancellation.
        sign = torch.where(theta >= 0.0, 1.0, -1.0).to(theta.dtype)
        t = sign / (theta.abs() + torch.hypot(theta, torch.ones_like(theta)))
        t = torch.where(is_zero, torch.zeros_like(t), t)
        cos = torch.rsqrt(t.square() + 1.0)
        sin = t * cos

        size = matrix.size(-1)
        rotation = (
            torch.eye(size, dtype=matrix.dtype, device=matrix.device)
            .expand_as(matrix)
            .clone()
        )
        rotation[..., p, p] = cos
        rotation[..., q, q] = cos
        rotation[..., p, q] = sin
        rotation[..., q, p] = -sin
        return rotation
