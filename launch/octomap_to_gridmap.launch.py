from launch import LaunchDescription
from launch_ros.actions import Node

def generate_launch_description():
    return LaunchDescription([
        Node(
            package='octomap_to_gridmap',
            executable='octomap_to_gridmap_node',
            name='octomap_to_gridmap_node',
            output='screen',
            emulate_tty=True,
            parameters=[
                {'min_height': 0.1},
                {'max_height': 1.0},
                {'aggregation': 'last'},
                {'mark_unknown': False},
                {'topic_profile': 'default'},
            ]
        )
    ])
