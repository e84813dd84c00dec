"""커밋 윈도우 diff 구성

커밋 식별자와 윈도우 크기로부터 윈도우 전체의 순 변경을 나타내는 diff 목록을 만듭니다.
"""

import logging
from typing import List, Set, Tuple

from fever_miner.change.artefact_diff import ArtefactDiff
from fever_miner.repository.repository_access import RepositoryAccess


class CommitWindowBuilder:
    """커밋 윈도우 → 정렬/중복 제거된 ArtefactDiff 목록"""

    def __init__(self, repository: RepositoryAccess, window_size: int = 2):
        """
        Args:
            repository: 저장소 접근 객체
            window_size: 윈도우가 포함하는 스냅샷 수 (2 = 커밋과 그 부모)
        """
        if window_size < 2:
            raise ValueError(f"window_size must be at least 2: {window_size}")
        self.repository = repository
        self.window_size = window_size
        self.logger = logging.getLogger(__name__)

    def build(self, commit_id: str) -> List[ArtefactDiff]:
        """윈도우의 합성 diff 생성
        
        윈도우 안에서 같은 경로가 여러 번 바뀌어도 양 끝 스냅샷을 비교하므로
        하나의 diff로 합쳐집니다.
        
        Raises:
            CommitResolutionError: 커밋을 해석할 수 없는 경우 (치명적)
        """
        target = self.repository.resolve(commit_id)

        # 윈도우에 변경이 포함되는 커밋들 (최신 순)
        window_commits = self.repository.first_parent_chain(target, self.window_size - 1)
        oldest = window_commits[-1] if window_commits else target
        base = self.repository.parent_of(oldest)

        if base is None:
            self.logger.debug(f"윈도우가 히스토리 시작에 닿음: {target[:12]} (빈 트리와 비교)")

        diffs = self.repository.diff(base, target)
        unique_diffs = deduplicate_diffs(diffs)
        self.logger.info(
            f"커밋 윈도우 구성 완료: {target[:12]} "
            f"({len(window_commits)}개 커밋, {len(unique_diffs)}개 diff)"
        )
        return unique_diffs


def deduplicate_diffs(diffs: List[ArtefactDiff]) -> List[ArtefactDiff]:
    """순서를 유지하며 (old_path, new_path, change_type) 기준으로 중복 제거"""
    seen: Set[Tuple[str, str, str]] = set()
    unique: List[ArtefactDiff] = []
    for diff in diffs:
        key = (diff.old_path, diff.new_path, diff.change_type.value)
        if key in seen:
            continue
        seen.add(key)
        unique.append(diff)
    return unique
