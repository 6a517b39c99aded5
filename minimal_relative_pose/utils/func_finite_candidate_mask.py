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


def finite_candidate_mask(candidates: torch.Tensor) -> torch.Tensor:
    """
    Which candidate matrices are entirely finite.
    The minimal solvers return NaN or Inf entries for degenerate samples rather than raising,
    use this to discard them before scoring.
    :param candidates: (B...)xKx3x3
    :return: A (B...)xK boolean tensor
    """
    return torch.isfinite(candidates).all(dim=-1).all(dim=-1)
