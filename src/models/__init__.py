from src.models.base import Base
from src.models.snapshot import Snapshot
from src.models.user import User

__all__ = [
    "Base",
    "Snapshot",
    "User",
]
