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
from abc import ABC, abstractmethod
import torch


class ISymmetricEigenSolver(ABC):
    """
    Eigen-decomposition of a batch of real symmetric matrices.
    Implementations must return the eigenvalues in ascending order, with the eigenvectors as columns
    in the same order, regardless of the order produced by whatever routine they wrap.
    """

    @abstractmethod
    def decompose(self, matrix: torch.Tensor) -> tuple[torch.Tensor, torch.Tensor]:
        """
        :param matrix: A (B...)xNxN symmetric matrix
        :return: Eigenvalues, (B...)xN ascending, and eigenvectors, (B...)xNxN, one per column.
        """
        pass

    def __call__(self, matrix: torch.Tensor) -> tuple[torch.Tensor, torch.Tensor]:
        return self.decompose(matrix)
