"""
Binary Octomap payload → pyoctomap.OcTree, and a leaf view of it for projection.

An ``octomap_msgs/Octomap`` carries only the node stream of a binary tree.
pyoctomap reads binary trees from ``.bt`` files, whose header must state the
node count, so the stream is sized and checked here before the library
reconstructs it. Every node record is two bytes holding a 2-bit code per
child (children 0-3 in the first byte, 4-7 in the second):
    00 absent, 01 free leaf, 10 occupied leaf, 11 inner node
"""

import logging
import math
import os
import tempfile
from collections import namedtuple
from typing import Iterator, Tuple

import numpy as np
import pyoctomap

from .exceptions import OctomapDecodeError

logger = logging.getLogger(__name__)

BINARY_FILE_HEADER = "# Octomap OcTree binary file"
OCTREE_ID = "OcTree"

_CODE_INNER = 0b11


Leaf = namedtuple("Leaf", ["x", "y", "z", "size", "depth", "occupancy", "occupied"])


def count_nodes(data: bytes) -> int:
    """Number of nodes a binary node stream describes, 0 for an empty tree."""
    if not data:
        return 0
    if len(data) % 2:
        raise OctomapDecodeError(f"Binary octree stream has odd length ({len(data)} bytes)")

    records = np.frombuffer(data, dtype="<u2").astype(np.int64)
    codes = (records[:, None] >> np.arange(0, 16, 2)) & 0b11

    if not codes[0].any():
        if len(records) > 1:
            raise OctomapDecodeError("Binary octree stream continues after an empty root")
        return 0
    if not codes[1:].any(axis=1).all():
        raise OctomapDecodeError("Binary octree stream has an inner node without children")

    inner = int(np.count_nonzero(codes == _CODE_INNER))
    if len(records) != inner + 1:
        raise OctomapDecodeError(
            f"Binary octree stream announces {inner + 1} node records but holds {len(records)}")
    return 1 + int(np.count_nonzero(codes))


def read_binary(data: bytes, resolution: float) -> "OctomapTree":
    resolution = float(resolution)
    if not math.isfinite(resolution) or resolution <= 0.0:
        raise OctomapDecodeError(f"Octree resolution must be a positive finite number, got {resolution}")

    size = count_nodes(data)
    tree = pyoctomap.OcTree(resolution)
    if size == 0:
        return OctomapTree(tree)

    header = f"{BINARY_FILE_HEADER}\nid {OCTREE_ID}\nsize {size}\nres {resolution!r}\ndata\n"
    with tempfile.NamedTemporaryFile(suffix=".bt", delete=False) as f:
        f.write(header.encode("ascii"))
        f.write(data)
        path = f.name
    try:
        ok = tree.readBinary(path)
    finally:
        os.unlink(path)

    if not ok:
        raise OctomapDecodeError(f"pyoctomap could not read the binary octree ({size} nodes)")
    logger.debug(f"Decoded binary octree: {size} nodes, {tree.getNumLeafNodes()} leaves")
    return OctomapTree(tree)


class OctomapTree:
    """Read-only view of a pyoctomap.OcTree with the interface project_tree expects."""

    def __init__(self, tree):
        self.tree = tree
        self.resolution = tree.getResolution()

    def metric_min(self) -> Tuple[float, float, float]:
        return tuple(float(v) for v in self.tree.getMetricMin())

    def metric_max(self) -> Tuple[float, float, float]:
        return tuple(float(v) for v in self.tree.getMetricMax())

    def leaves(self) -> Iterator[Leaf]:
        # the iterator yields itself; read everything before advancing
        for it in self.tree.begin_leafs():
            x, y, z = it.getCoordinate()
            node = it.current_node
            yield Leaf(x, y, z, it.getSize(), it.getDepth(),
                       node.getOccupancy(), bool(self.tree.isNodeOccupied(node)))

    def is_node_occupied(self, leaf: Leaf) -> bool:
        return leaf.occupied
