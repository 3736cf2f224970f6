from .base import AchievementInputs, AchievementStore, SnapshotWriter, fetch_inputs
from .local_store import LocalAchievementStore
from .server_store import ServerAchievementStore

__all__ = [
    "AchievementInputs",
    "AchievementStore",
    "SnapshotWriter",
    "fetch_inputs",
    "LocalAchievementStore",
    "ServerAchievementStore",
]
