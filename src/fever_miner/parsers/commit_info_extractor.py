"""커밋 정보 추출기

커밋 윈도우 diff를 분류하여 도메인별 빌더로 보내고, 결과를 하나의 EvolutionStep으로 묶습니다.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from fever_miner.change.evolution_step import EvolutionStep
from fever_miner.change.extraction_report import ExtractionReport, FailedWindow
from fever_miner.config.settings import FeverConfig
from fever_miner.exceptions import ExtractionError
from fever_miner.repository.git_repository import GitRepository
from fever_miner.repository.repository_access import RepositoryAccess
from fever_miner.tools.tool_executor import ToolExecutor
from .artifact_classifier import Domain, classify_diff, extract_file_changes
from .build.mapping_evolution_builder import MappingEvolutionBuilder
from .commit_window_builder import CommitWindowBuilder
from .edit_reconciler import EditReconciler
from .featuremodel.feature_model_evolution_builder import FeatureModelEvolutionBuilder
from .featurizer import Featurizer, PassthroughFeaturizer
from .implementation.implementation_evolution_builder import ImplementationEvolutionBuilder
from .workspace_stager import WorkspaceStager


class CommitInfoExtractor:
    """커밋 윈도우 → EvolutionStep 추출 오케스트레이터"""

    def __init__(self, config: FeverConfig,
                 repository: Optional[RepositoryAccess] = None,
                 tool_executor: Optional[ToolExecutor] = None,
                 stager: Optional[WorkspaceStager] = None,
                 featurizer: Optional[Featurizer] = None):
        """
        Args:
            config: 추출 설정
            repository: 저장소 접근 객체 (None이면 설정 경로의 git 저장소)
            tool_executor: 외부 도구 실행기
            stager: 임시 작업 공간 관리자
            featurizer: 추출 결과를 넘겨받을 하위 단계
        """
        self.config = config
        self.tool_executor = tool_executor or ToolExecutor(config)
        self.repository = repository or GitRepository(config.repository.path, self.tool_executor)
        self.stager = stager or WorkspaceStager(config.extraction.scratch_dir)
        self.featurizer = featurizer or PassthroughFeaturizer()
        self.logger = logging.getLogger(__name__)

        strict = config.extraction.strict_exit_codes
        self.window_builder = CommitWindowBuilder(self.repository, config.extraction.window_size)
        self.feature_model_builder = FeatureModelEvolutionBuilder(
            self.repository, self.stager, self.tool_executor, strict_exit_codes=strict
        )
        self.mapping_builder = MappingEvolutionBuilder(self.repository, self.stager)
        self.implementation_builder = ImplementationEvolutionBuilder(
            self.repository, self.stager, self.tool_executor, strict_exit_codes=strict
        )
        self.reconciler = EditReconciler()

    def extract_step(self, commit_ids: List[str]) -> EvolutionStep:
        """커밋 목록에서 EvolutionStep 하나 추출

        임시 파일은 성공/실패와 관계없이 호출이 끝날 때 정리됩니다.

        Raises:
            ExtractionError: 커밋 해석, 외부 도구, 작업 공간 오류 (부분 결과 없음)
        """
        step = EvolutionStep()
        sequences: Dict[Domain, int] = {domain: 0 for domain in Domain}

        try:
            for commit_id in commit_ids:
                step = step.add_commit(commit_id)
                for diff in self.window_builder.build(commit_id):
                    step = step.add_file_changes(extract_file_changes(diff))

                    domain = classify_diff(diff)
                    sequence = sequences[domain]
                    sequences[domain] += 1

                    if domain == Domain.FEATURE_MODEL:
                        step = step.add_feature_model_change(
                            self.feature_model_builder.build(diff, sequence)
                        )
                    elif domain == Domain.MAPPING:
                        step = step.add_mapping_change(self.mapping_builder.build(diff, sequence))
                    elif domain == Domain.IMPLEMENTATION:
                        step = step.add_implementation_change(
                            self.implementation_builder.build(diff, sequence)
                        )

            step = self.reconciler.reconcile(step)
        finally:
            self.stager.sweep()

        self.logger.info(
            f"추출 완료: {len(step.commit_ids)}개 커밋, 파일 변경 {len(step.file_changes)}개, "
            f"가변성 {len(step.feature_model_changes)}, 매핑 {len(step.mapping_changes)}, "
            f"구현 {len(step.implementation_changes)}"
        )
        return step

    def extract_feature_changes(self, commit_ids: List[str]) -> Any:
        """단계를 추출하여 featurizer에 전달"""
        step = self.extract_step(commit_ids)
        return self.featurizer.featurize([step])

    def extract_batch(self, windows: List[List[str]]) -> ExtractionReport:
        """여러 윈도우를 순차적으로 추출

        실패한 윈도우는 기록하고 다음 윈도우로 넘어갑니다.
        """
        report = ExtractionReport()
        start_time = time.time()

        for index, commit_ids in enumerate(windows, start=1):
            self.logger.info(f"윈도우 처리 중 ({index}/{len(windows)}): {', '.join(commit_ids)}")
            try:
                report.steps.append(self.extract_step(commit_ids))
            except ExtractionError as e:
                self.logger.error(f"윈도우 추출 실패: {commit_ids} - {e}")
                report.failures.append(FailedWindow(
                    commit_ids=list(commit_ids),
                    error_type=type(e).__name__,
                    error_message=str(e),
                ))

        report.processing_time_seconds = time.time() - start_time
        self.logger.info(
            f"배치 추출 완료: 성공 {report.total_steps}개, 실패 {report.total_failures}개 "
            f"({report.processing_time_seconds:.1f}초)"
        )
        return report

    def close(self) -> None:
        """저장소 핸들 해제"""
        self.repository.close()

    def __enter__(self) -> 'CommitInfoExtractor':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
