"""Test configuration.

Ensure the package root is on sys.path so tests can import
`octomap_to_gridmap.*` without a colcon build.
"""

import os
import sys


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
