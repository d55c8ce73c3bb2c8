import numpy as np
import pytest

pytest.importorskip("rclpy")
pytest.importorskip("nav_msgs")
pytest.importorskip("octomap_msgs")
pytest.importorskip("ament_index_python")
builtin_interfaces = pytest.importorskip("builtin_interfaces.msg")

from octomap_to_gridmap.octomap_to_gridmap_node import raster_to_occupancy_grid  # noqa: E402
from octomap_to_gridmap.projector import OccupancyRaster  # noqa: E402


def test_raster_to_occupancy_grid():
    cells = np.array([90, 0, -1, 0, 100, 0], dtype=np.int8)
    raster = OccupancyRaster(
        resolution=0.5,
        width=3,
        height=2,
        origin=(-1.5, 2.0),
        cells=cells,
        touched=cells != -1,
        frame_id="odom",
    )
    stamp = builtin_interfaces.Time(sec=12, nanosec=34)

    og = raster_to_occupancy_grid(raster, stamp)

    assert og.header.frame_id == "odom"
    assert og.header.stamp == stamp
    assert og.info.map_load_time == stamp
    assert og.info.resolution == pytest.approx(0.5)
    assert (og.info.width, og.info.height) == (3, 2)
    assert (og.info.origin.position.x, og.info.origin.position.y) == (-1.5, 2.0)
    assert og.info.origin.orientation.w == 1.0
    assert list(og.data) == [90, 0, -1, 0, 100, 0]
