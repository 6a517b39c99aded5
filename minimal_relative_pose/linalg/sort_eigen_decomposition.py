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


def sort_eigen_decomposition(
    eigenvalues: torch.Tensor, eigenvectors: torch.Tensor
) -> tuple[torch.Tensor, torch.Tensor]:
    """
    Re-order an eigen-decomposition so that the eigenvalues are ascending.
    The eigenvector columns are permuted to match.
    :param eigenvalues: (B...)xN eigenvalues, in any order
    :param eigenvectors: (B...)xNxN eigenvectors, column i corresponding to eigenvalue i
    :return: The sorted eigenvalues and eigenvectors, with the same shapes
    """
    order = torch.argsort(eigenvalues, dim=-1, stable=True)
    sorted_values = torch.gather(eigenvalues, -1, order)
    column_order = order.unsqueeze(-2).expand_as(eigenvectors)
    sorted_vectors = torch.gather(eigenvectors, -1, column_order)
    return sorted_values, sorted_vectors
