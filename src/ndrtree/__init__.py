# Copyright (C) 2018 DataStorm
#
# This file is part of NDRTree.
#
# NDRTree is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# NDRTree is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
"""
In-memory spatial indexing of axis-aligned bounding boxes.

The index is a R-tree in any number of dimensions: items are inserted one by
one with R*-tree split heuristics, or bulk loaded with the OMT variant of the
sort-tile-recurse packing algorithm. Queries report the items whose bounding
box intersects a window.

Trees are plain nested :class:`Node` objects, so that they are easy to walk,
export and import.
"""
import logging

from .accessors import (  # noqa: F401
    GeometryAccessor, BoxAccessor, FormatAccessor, CallableAccessor,
    make_accessor,
)
from .index import RTree  # noqa: F401
from .tree import Node  # noqa: F401

__version__ = "0.3.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
