"""
Octree → 2D occupancy raster projection.

Every leaf whose centroid lies strictly inside the height band and which
the tree classifies as occupied is written into the cell below it:

    xi    = round((x - r/2 - min_x) / r)
    yi    = round((y - r/2 - min_y) / r)
    index = xi + width * yi

Indices outside [0, width*height) are skipped, never clamped. When several
leaves of a column land in the same cell, the last one in the tree's
depth-first leaf order wins (``aggregation="last"``); ``"max"`` keeps the
highest occupancy instead.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .exceptions import OctomapDecodeError, OctomapFormatError
from .octree import OCTREE_ID, OctomapTree, read_binary
from .utils import measure_time, round_half_away

logger = logging.getLogger(__name__)

UNKNOWN = -1
AGGREGATIONS = ("last", "max")


@dataclass(frozen=True)
class HeightBand:
    z_min: float = 0.1
    z_max: float = 1.0

    @classmethod
    def from_params(cls, min_height, max_height) -> "HeightBand":
        return cls(float(min_height), float(max_height))

    def is_valid(self) -> bool:
        return math.isfinite(self.z_min) and math.isfinite(self.z_max) and self.z_min < self.z_max

    def contains(self, z: float) -> bool:
        return self.z_min < z < self.z_max


@dataclass
class OccupancyRaster:
    resolution: float
    width: int
    height: int
    origin: Tuple[float, float]
    cells: np.ndarray
    touched: np.ndarray
    frame_id: str = ""
    stats: dict = field(default_factory=dict)

    def cell(self, xi: int, yi: int) -> int:
        return int(self.cells[xi + self.width * yi])

    def as_grid(self) -> np.ndarray:
        """Cells as a (height, width) view, row yi / column xi."""
        return self.cells.reshape((self.height, self.width))


def _payload_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    # int8[] fields arrive as a list or array('b') of signed values
    return np.asarray(data, dtype=np.int8).tobytes()


def decode_octomap(msg) -> OctomapTree:
    """Validate and decode an ``octomap_msgs/Octomap``-shaped message."""
    if msg.id != OCTREE_ID:
        raise OctomapFormatError(f"Octomap is not a binary {OCTREE_ID} (id '{msg.id}')")
    if not msg.binary:
        raise OctomapDecodeError(f"Octomap message carries a full {OCTREE_ID}, expected binary data")
    return read_binary(_payload_bytes(msg.data), msg.resolution)


def footprint(resolution: float, metric_min, metric_max) -> Tuple[int, int]:
    if not (math.isfinite(resolution) and resolution > 0.0):
        raise ValueError(f"Map resolution must be a positive finite number, got {resolution}")
    width = int((metric_max[0] - metric_min[0]) / resolution)
    height = int((metric_max[1] - metric_min[1]) / resolution)
    return max(width, 0), max(height, 0)


@measure_time
def project(msg, band: HeightBand, aggregation: str = "last", mark_unknown: bool = False,
            log: Optional[logging.Logger] = None) -> OccupancyRaster:
    """Project an Octomap message onto a 2D raster.

    Raises OctomapFormatError / OctomapDecodeError when the message cannot be
    turned into an OcTree; nothing is produced in that case.
    """
    tree = decode_octomap(msg)
    return project_tree(tree, band, frame_id=msg.header.frame_id, aggregation=aggregation,
                        mark_unknown=mark_unknown, log=log)


def project_tree(tree, band: HeightBand, frame_id: str = "", aggregation: str = "last",
                 mark_unknown: bool = False, log: Optional[logging.Logger] = None) -> OccupancyRaster:
    """Project any tree exposing ``resolution``, ``metric_min()``, ``metric_max()``,
    ``leaves()`` and ``is_node_occupied(leaf)``."""
    log = log or logger
    if aggregation not in AGGREGATIONS:
        raise ValueError(f"Unknown aggregation '{aggregation}', expected one of {AGGREGATIONS}")

    resolution = float(tree.resolution)
    min_x, min_y, _ = tree.metric_min()
    max_x, max_y, _ = tree.metric_max()
    width, height = footprint(resolution, (min_x, min_y), (max_x, max_y))
    size = width * height

    cells = np.zeros(size, dtype=np.int8)
    touched = np.zeros(size, dtype=bool)

    half = resolution / 2.0
    visited = in_band = written = skipped = 0
    for leaf in tree.leaves():
        visited += 1
        occ_pct = round_half_away(leaf.occupancy * 100.0)

        if not band.contains(leaf.z):
            continue
        in_band += 1

        xi = round_half_away((leaf.x - half - min_x) / resolution)
        yi = round_half_away((leaf.y - half - min_y) / resolution)
        index = xi + width * yi
        if index < 0 or index >= size:
            skipped += 1
            continue

        touched[index] = True
        if not tree.is_node_occupied(leaf):
            continue

        if aggregation == "max":
            cells[index] = max(int(cells[index]), occ_pct)
        else:
            cells[index] = occ_pct
        written += 1

    if mark_unknown:
        cells[~touched] = UNKNOWN

    log.debug(f"Projected {visited} leaves ({in_band} in band, {written} written, "
              f"{skipped} out of bounds) onto {width}x{height} cells")

    return OccupancyRaster(
        resolution=resolution,
        width=width,
        height=height,
        origin=(min_x, min_y),
        cells=cells,
        touched=touched,
        frame_id=frame_id,
        stats={"leaves": visited, "in_band": in_band, "written": written, "out_of_bounds": skipped},
    )
