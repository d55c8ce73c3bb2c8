#!/usr/bin/env python3
"""
ROS 2 node: Octomap (binary OcTree) → OccupancyGrid

"""

import os

import rclpy
from rclpy.node import Node
from nav_msgs.msg import OccupancyGrid
from octomap_msgs.msg import Octomap
from ament_index_python.packages import get_package_share_directory

from octomap_to_gridmap.config import read_topics
from octomap_to_gridmap.exceptions import ProjectionError
from octomap_to_gridmap.projector import AGGREGATIONS, HeightBand, OccupancyRaster, project


# ────────────────────── Utilities ──────────────────────

def load_topics(profile: str) -> dict:
    pkg = get_package_share_directory("octomap_to_gridmap")
    return read_topics(os.path.join(pkg, "config", "topics.yaml"), profile)


def raster_to_occupancy_grid(raster: OccupancyRaster, stamp) -> OccupancyGrid:
    og = OccupancyGrid()
    og.header.stamp = stamp
    og.header.frame_id = raster.frame_id
    og.info.map_load_time = stamp
    og.info.resolution = raster.resolution
    og.info.width = raster.width
    og.info.height = raster.height
    og.info.origin.position.x = raster.origin[0]
    og.info.origin.position.y = raster.origin[1]
    og.info.origin.orientation.w = 1.0
    og.data = raster.cells.astype(int).tolist()
    return og


# ────────────────────── main node ──────────────────────
class OctomapToGridmapNode(Node):

    def __init__(self):
        super().__init__("octomap_to_gridmap_node")

        # -------------------- parameters  --------------------
        min_height = self.declare_parameter("min_height", 0.1).get_parameter_value().double_value
        max_height = self.declare_parameter("max_height", 1.0).get_parameter_value().double_value
        self.band = HeightBand.from_params(min_height, max_height)
        if not self.band.is_valid():
            self.get_logger().warn(f"Height band ({min_height}, {max_height}) is empty; every grid will be blank.")

        self.aggregation = self.declare_parameter("aggregation", "last").get_parameter_value().string_value
        if self.aggregation not in AGGREGATIONS:
            raise ValueError(f"Parameter 'aggregation' must be one of {AGGREGATIONS}, got '{self.aggregation}'")
        self.mark_unknown = self.declare_parameter("mark_unknown", False).get_parameter_value().bool_value

        # -------------------- Topic --------------------
        profile = self.declare_parameter("topic_profile", "default").get_parameter_value().string_value
        topics = load_topics(profile)

        self.pub_grid = self.create_publisher(OccupancyGrid, topics["grid_topic"], 10)
        self.sub_octomap = self.create_subscription(Octomap, topics["octomap_topic"], self.octomap_cb, 10)

        self.get_logger().info(
            f"Projecting {topics['octomap_topic']} → {topics['grid_topic']} "
            f"for z in ({self.band.z_min}, {self.band.z_max}), aggregation '{self.aggregation}'")

# ────────────────────────────────────────────────────────────────────────────────────────────────
# ──────────────────────────────── Main Callback ──────────────────────────────────────────
# ────────────────────────────────────────────────────────────────────────────────────────────────
    def octomap_cb(self, msg: Octomap):
        try:
            raster = project(msg, self.band, aggregation=self.aggregation,
                             mark_unknown=self.mark_unknown, log=self.get_logger())
        except ProjectionError as e:
            self.get_logger().warn(f"Discarding octomap: {e}")
            return

        if raster.width == 0 or raster.height == 0:
            self.get_logger().warn("Octomap has no extent; publishing an empty grid.")

        self.pub_grid.publish(raster_to_occupancy_grid(raster, msg.header.stamp))
        self.get_logger().info(
            f"Published {raster.width}x{raster.height} grid in '{raster.frame_id}' "
            f"({raster.stats['written']} occupied writes)")


# ───────────── Entry Point ─────────────
def main(argv=None):
    rclpy.init(args=argv)
    node = OctomapToGridmapNode()
    rclpy.spin(node)
    node.destroy_node()
    rclpy.shutdown()


if __name__ == "__main__":
    main()
