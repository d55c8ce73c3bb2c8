import os

import pytest

from octomap_to_gridmap.config import read_topics
from octomap_to_gridmap.projector import HeightBand
from octomap_to_gridmap.utils import round_half_away


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def test_shipped_topics_default_profile():
    topics = read_topics(os.path.join(ROOT, "config", "topics.yaml"), "default")
    assert topics["octomap_topic"] == "/octomap_full"
    assert topics["grid_topic"] == "/convert_map"


def test_missing_profile(tmp_path):
    path = tmp_path / "topics.yaml"
    path.write_text("robot1:\n  octomap_topic: /a\n  grid_topic: /b\n", encoding="utf-8")

    assert read_topics(str(path), "robot1") == {"octomap_topic": "/a", "grid_topic": "/b"}
    with pytest.raises(KeyError):
        read_topics(str(path), "robot2")


def test_incomplete_profile(tmp_path):
    path = tmp_path / "topics.yaml"
    path.write_text("robot1:\n  octomap_topic: /a\n", encoding="utf-8")
    with pytest.raises(KeyError, match="grid_topic"):
        read_topics(str(path), "robot1")


def test_height_band_from_params():
    band = HeightBand.from_params(0, "1.5")
    assert band == HeightBand(0.0, 1.5)
    assert band.is_valid()
    assert not HeightBand(0.0, float("inf")).is_valid()


def test_round_half_away():
    assert round_half_away(0.5) == 1
    assert round_half_away(2.5) == 3
    assert round_half_away(-0.5) == -1
    assert round_half_away(-1.4) == -1
