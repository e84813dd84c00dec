"""변경 기록 패키지

커밋 윈도우에서 추출한 diff, 파일 변경, 부분 진화, 진화 단계 데이터 구조를 제공합니다.
"""

from .artefact_diff import ArtefactDiff, DiffChangeType, normalize_blob_id
from .file_change import ContentType, FileChange, FileChangeType
from .model_side import Absent, ModelSide, Present
from .partial_evolution import (
    PartialFeatureModelEvolution,
    PartialImplementationEvolution,
    PartialMappingEvolution,
)
from .evolution_step import EvolutionStep
from .extraction_report import ExtractionReport, FailedWindow

__all__ = [
    'ArtefactDiff',
    'DiffChangeType',
    'normalize_blob_id',
    'ContentType',
    'FileChange',
    'FileChangeType',
    'Absent',
    'ModelSide',
    'Present',
    'PartialFeatureModelEvolution',
    'PartialImplementationEvolution',
    'PartialMappingEvolution',
    'EvolutionStep',
    'ExtractionReport',
    'FailedWindow'
]
