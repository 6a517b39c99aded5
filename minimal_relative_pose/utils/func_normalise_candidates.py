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


def normalise_candidates(candidates: torch.Tensor) -> torch.Tensor:
    """
    Scale each matrix to unit Frobenius norm.
    Essential matrices are only defined up to scale, so compare them after this.
    Zero and non-finite matrices become NaN.
    :param candidates: (B...)x3x3
    :return: (B...)x3x3
    """
    norm = torch.linalg.matrix_norm(candidates, keepdim=True)
    return candidates / norm
