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
from torch import Tensor
from typing import NamedTuple


class MinimalSample(NamedTuple):
    """
    Three correspondences between two views.
    Row 0 is the reference correspondence.
    Points are 2D image coordinates for the orthographic model, or 3D unit bearings for the upright model.
    May gain batch dimensions.
    """
    points_a: Tensor    # (B...)x3x2 or (B...)x3x3
    points_b: Tensor    # (B...)x3x2 or (B...)x3x3
