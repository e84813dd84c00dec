"""매핑(빌드 스크립트) 진화 추출"""

import logging
from typing import Optional

from fever_miner.change.artefact_diff import ArtefactDiff
from fever_miner.change.model_side import Absent, ModelSide, Present
from fever_miner.change.partial_evolution import PartialMappingEvolution
from fever_miner.exceptions import MissingObjectError
from fever_miner.parsers.paths import evolution_path
from fever_miner.parsers.workspace_stager import WorkspaceStager
from fever_miner.repository.repository_access import RepositoryAccess
from .build_script_parser import BuildScriptParser


class MappingEvolutionBuilder:
    """빌드 스크립트 diff → PartialMappingEvolution"""

    def __init__(self, repository: RepositoryAccess, stager: WorkspaceStager,
                 parser: Optional[BuildScriptParser] = None):
        self.repository = repository
        self.stager = stager
        self.parser = parser or BuildScriptParser()
        self.logger = logging.getLogger(__name__)

    def build(self, diff: ArtefactDiff, sequence: int) -> PartialMappingEvolution:
        """매핑 변경 추출
        
        Args:
            diff: Mapping으로 분류된 diff
            sequence: 단계 내 매핑 diff 순번 (임시 파일 이름용)
        """
        old_side = self._build_side(diff.old_blob_id, diff.old_path, "old", sequence)
        new_side = self._build_side(diff.new_blob_id, diff.new_path, "new", sequence)
        return PartialMappingEvolution(
            path=evolution_path(diff.old_path, diff.new_path),
            old=old_side,
            new=new_side,
        )

    def _build_side(self, blob_id: Optional[str], artifact_path: str,
                    side: str, sequence: int) -> ModelSide:
        # 순수 추가/삭제에서는 해당 쪽 복원을 건너뜀
        if blob_id is None:
            return Absent()

        staged = self.stager.create_file(f"mapping_{side}_{sequence}_", ".map")
        try:
            self.repository.restore_blob(blob_id, str(staged))
        except MissingObjectError as e:
            self.logger.debug(f"빌드 스크립트 blob 없음, 빈 모델 사용: {e}")
            return Absent()

        return Present(self.parser.parse_file(staged, artifact_path))
