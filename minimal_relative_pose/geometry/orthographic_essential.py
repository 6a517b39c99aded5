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


def orthographic_essential_from_parameters(
    a: torch.Tensor,
    b: torch.Tensor,
    c: torch.Tensor,
    d: torch.Tensor,
    e: torch.Tensor,
) -> torch.Tensor:
    """
    Assemble an orthographic essential matrix from its five free entries:
    [[0, 0, a], [0, 0, b], [c, d, e]]
    All arguments should broadcast together.
    :return: A (B...)x3x3 essential matrix
    """
    a, b, c, d, e = torch.broadcast_tensors(a, b, c, d, e)
    zero = torch.zeros_like(a)
    return torch.stack([zero, zero, a, zero, zero, b, c, d, e], dim=-1).reshape(
        *a.shape, 3, 3
    )
