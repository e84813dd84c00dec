"""부분 진화 기록의 대표 경로 결정"""

from typing import Optional

from fever_miner.change.artefact_diff import ArtefactDiff, DiffChangeType
from fever_miner.constants import DEV_NULL


def is_usable_path(path: Optional[str]) -> bool:
    """비어 있지 않고 /dev/null 이 아닌 경로인지 여부"""
    return bool(path) and path != DEV_NULL and not path.endswith("dev/null")


def evolution_path(old_path: Optional[str], new_path: Optional[str]) -> str:
    """가변성/매핑 진화의 경로 결정
    
    이전 경로를 쓸 수 없으면 새 경로, 새 경로를 쓸 수 없으면 이전 경로,
    같으면 그 경로, 다르면(이름 변경) 새 경로를 사용합니다.
    """
    if not is_usable_path(old_path):
        return new_path or ""
    if not is_usable_path(new_path):
        return old_path
    if old_path == new_path:
        return old_path
    return new_path


def implementation_path(diff: ArtefactDiff) -> str:
    """구현 진화의 경로: 순수 추가면 새 경로, 그 외에는 이전 경로"""
    if diff.change_type == DiffChangeType.ADD:
        return diff.new_path
    return diff.old_path
