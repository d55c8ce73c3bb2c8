import yaml


TOPIC_KEYS = ("octomap_topic", "grid_topic")


def read_topics(path: str, profile: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        profiles = yaml.safe_load(f) or {}
    if profile not in profiles:
        raise KeyError(f"Topic profile '{profile}' not found in {path}")
    topics = profiles[profile]
    missing = [k for k in TOPIC_KEYS if k not in topics]
    if missing:
        raise KeyError(f"Topic profile '{profile}' in {path} is missing {', '.join(missing)}")
    return topics
