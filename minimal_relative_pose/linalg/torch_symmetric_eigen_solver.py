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
from .i_symmetric_eigen_solver import ISymmetricEigenSolver
from .sort_eigen_decomposition import sort_eigen_decomposition


class TorchSymmetricEigenSolver(ISymmetricEigenSolver):
    """
    Uses torch.linalg.eigh. The result is always re-sorted ascending,
    whatever order the backend produces.
    """

    def decompose(self, matrix: torch.Tensor) -> tuple[torch.Tensor, torch.Tensor]:
        eigenvalues, eigenvectors = torch.linalg.eigh(matrix)
        return sort_eigen_decomposition(eigenvalues, eigenvectors)
