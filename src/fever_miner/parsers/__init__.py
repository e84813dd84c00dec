"""커밋 윈도우 추출 파이프라인"""

from .artifact_classifier import (
    Domain,
    classify,
    classify_diff,
    extract_file_changes,
    file_content_type,
)
from .commit_info_extractor import CommitInfoExtractor
from .commit_window_builder import CommitWindowBuilder
from .edit_reconciler import EditReconciler, dispatch_unassigned_edits
from .featurizer import Featurizer, PassthroughFeaturizer
from .workspace_stager import WorkspaceStager

__all__ = [
    'Domain',
    'classify',
    'classify_diff',
    'extract_file_changes',
    'file_content_type',
    'CommitInfoExtractor',
    'CommitWindowBuilder',
    'EditReconciler',
    'dispatch_unassigned_edits',
    'Featurizer',
    'PassthroughFeaturizer',
    'WorkspaceStager',
]
