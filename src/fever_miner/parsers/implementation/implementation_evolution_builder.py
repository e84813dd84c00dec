"""구현 진화 추출

소스 diff의 양쪽을 임시 프로젝트에 스테이징하고 cppstats로 feature 위치를 스캔한 뒤
변경 전/후 ImplementationModel과 미할당 편집을 만듭니다.
"""

import logging
from pathlib import Path
from typing import Optional

from fever_miner.change.artefact_diff import ArtefactDiff
from fever_miner.change.model_side import Absent, ModelSide, Present
from fever_miner.change.partial_evolution import PartialImplementationEvolution
from fever_miner.constants import FEATURE_LOCATIONS_FILE
from fever_miner.exceptions import MissingObjectError, MissingToolOutputError
from fever_miner.models.implementation_model import ImplementationModel
from fever_miner.parsers.paths import implementation_path
from fever_miner.parsers.workspace_stager import WorkspaceStager
from fever_miner.repository.repository_access import RepositoryAccess
from fever_miner.tools.tool_executor import ToolExecutor
from .code_model_builder import CodeModelBuilder, compute_edits, read_lines
from .feature_location_parser import FeatureLocationParser

SOURCE_DIR_NAME = "source"


class ImplementationEvolutionBuilder:
    """소스 diff → PartialImplementationEvolution"""

    def __init__(self, repository: RepositoryAccess, stager: WorkspaceStager,
                 tool_executor: ToolExecutor, strict_exit_codes: bool = True,
                 location_parser: Optional[FeatureLocationParser] = None,
                 model_builder: Optional[CodeModelBuilder] = None):
        self.repository = repository
        self.stager = stager
        self.tool_executor = tool_executor
        self.strict_exit_codes = strict_exit_codes
        self.location_parser = location_parser or FeatureLocationParser()
        self.model_builder = model_builder or CodeModelBuilder()
        self.logger = logging.getLogger(__name__)

    def build(self, diff: ArtefactDiff, sequence: int) -> PartialImplementationEvolution:
        """구현 변경 추출

        Args:
            diff: Implementation으로 분류된 diff
            sequence: 단계 내 구현 diff 순번 (스테이징 파일 이름용)

        Raises:
            ExternalToolError: 스캐너 실행 실패
            MissingToolOutputError: 스캐너 결과 CSV가 없는 경우
            InvalidToolOutputError: 스캐너 결과 CSV를 해석할 수 없는 경우
        """
        project_dir = self.stager.create_directory("prj")
        source_dir = self.stager.create_subdirectory(project_dir, SOURCE_DIR_NAME)

        old_file = self.stager.create_named_file(source_dir, f"src__old_{sequence}.c")
        new_file = self.stager.create_named_file(source_dir, f"src__new_{sequence}.c")
        has_old = self._restore(diff.old_blob_id, old_file)
        has_new = self._restore(diff.new_blob_id, new_file)

        manifest = self.stager.create_file("cpp_stats_input", ".in")
        # 첫 줄은 프로젝트 루트, 둘째 줄은 탭으로 시작하는 상대 소스 경로
        manifest.write_text(f"{project_dir}\n\t{SOURCE_DIR_NAME}/{old_file.name}", encoding='utf-8')

        result = self.tool_executor.execute_tool_call(
            "scan_feature_locations",
            {"manifest_path": str(manifest), "project_dir": str(project_dir)}
        )
        result.raise_for_status("cppstats", strict=self.strict_exit_codes)

        output_path = Path(result.metadata.get("output_path") or project_dir / FEATURE_LOCATIONS_FILE)
        if not output_path.is_file():
            raise MissingToolOutputError(
                f"cppstats output not found: {output_path}", expected_path=str(output_path)
            )
        locations = self.location_parser.parse_file(output_path)

        old_model = self.model_builder.build_model(old_file, locations, diff.old_path)
        new_model = self.model_builder.build_model(new_file, locations, diff.new_path)
        edits = compute_edits(read_lines(old_file), read_lines(new_file))
        unassigned = self.model_builder.assign_edits(edits, old_model, new_model)

        path = implementation_path(diff)
        self.logger.debug(
            f"구현 모델 추출: {path} (블록 {len(old_model.blocks)}→{len(new_model.blocks)}, "
            f"미할당 편집 {len(unassigned)}개)"
        )
        return PartialImplementationEvolution(
            path=path,
            old=self._side(has_old, old_model),
            new=self._side(has_new, new_model),
            diff=diff,
            unassigned_edits=unassigned,
        )

    def _restore(self, blob_id: Optional[str], target: Path) -> bool:
        """blob을 파일로 복원 (없으면 빈 파일 유지)"""
        if blob_id is None:
            return False
        try:
            self.repository.restore_blob(blob_id, str(target))
        except MissingObjectError as e:
            self.logger.debug(f"소스 blob 없음, 빈 파일 사용: {e}")
            return False
        return True

    @staticmethod
    def _side(present: bool, model: ImplementationModel) -> ModelSide:
        return Present(model) if present else Absent()
