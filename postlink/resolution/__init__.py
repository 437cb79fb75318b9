from postlink.resolution.base import BaseGroupCatalog
from postlink.resolution.exceptions import GroupNotFoundError
from postlink.resolution.models import MatchStrategy, Resolution
from postlink.resolution.resolver import GroupResolver

__all__ = [
    "BaseGroupCatalog",
    "GroupNotFoundError",
    "GroupResolver",
    "MatchStrategy",
    "Resolution",
]
