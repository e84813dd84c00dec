"""저장소 접근 인터페이스

추출 파이프라인이 저장소 객체에 접근하는 경계입니다.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from fever_miner.change.artefact_diff import ArtefactDiff


class RepositoryAccess(ABC):
    """저장소 접근 포트"""

    @abstractmethod
    def resolve(self, commit_id: str) -> str:
        """커밋 식별자를 전체 커밋 id로 해석
        
        Raises:
            CommitResolutionError: 커밋을 찾을 수 없는 경우
        """
        pass

    @abstractmethod
    def first_parent_chain(self, commit_id: str, count: int) -> List[str]:
        """커밋부터 첫 번째 부모를 따라 최대 count개의 커밋 id (최신 순)"""
        pass

    @abstractmethod
    def parent_of(self, commit_id: str) -> Optional[str]:
        """첫 번째 부모 커밋 id (루트 커밋이면 None)"""
        pass

    @abstractmethod
    def diff(self, base: Optional[str], target: str) -> List[ArtefactDiff]:
        """base 트리에서 target 트리로의 아티팩트 diff (base가 None이면 빈 트리)"""
        pass

    @abstractmethod
    def restore_blob(self, blob_id: str, target_path: str) -> None:
        """blob 내용을 파일로 복원
        
        Raises:
            MissingObjectError: blob이 없는 경우
        """
        pass

    def close(self) -> None:
        """저장소 핸들 해제"""
        pass
