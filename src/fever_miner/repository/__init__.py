"""저장소 접근 패키지"""

from .repository_access import RepositoryAccess
from .git_repository import GitRepository, parse_raw_diff

__all__ = [
    'RepositoryAccess',
    'GitRepository',
    'parse_raw_diff'
]
