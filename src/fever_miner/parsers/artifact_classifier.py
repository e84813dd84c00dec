"""아티팩트 분류기

파일 이름을 도메인(가변성 모델, 매핑, 구현, 기타)과 내용 타입으로 분류합니다.
상태가 없는 순수 함수들이며 테이블은 constants 모듈에 있습니다.
"""

from enum import Enum
from typing import Callable, List, Tuple
import posixpath

from fever_miner.change.artefact_diff import ArtefactDiff, DiffChangeType
from fever_miner.change.file_change import ContentType, FileChange, FileChangeType
from fever_miner.constants import (
    BINARY_FILE_EXTENSIONS,
    BUILD_FILE_EXTENSIONS,
    BUILD_FILE_NAMES,
    BUILD_FILE_PREFIXES,
    DATA_FILE_EXTENSIONS,
    DOCUMENTATION_FILE_EXTENSIONS,
    DOCUMENTATION_FILE_NAMES,
    SOURCE_FILE_EXTENSIONS,
    VARIABILITY_FILE_NAMES,
    VARIABILITY_FILE_PREFIXES,
)


class Domain(Enum):
    """아티팩트 도메인"""

    FEATURE_MODEL = "feature_model"
    MAPPING = "mapping"
    IMPLEMENTATION = "implementation"
    OTHER = "other"


def _basename(name: str) -> str:
    return posixpath.basename(name or "")


def _extension(name: str) -> str:
    return posixpath.splitext(_basename(name))[1].lower()


def is_variability_file(name: str) -> bool:
    base = _basename(name)
    return base in VARIABILITY_FILE_NAMES or base.startswith(VARIABILITY_FILE_PREFIXES)


def is_build_file(name: str) -> bool:
    base = _basename(name)
    return (base in BUILD_FILE_NAMES
            or base.startswith(BUILD_FILE_PREFIXES)
            or _extension(base) in BUILD_FILE_EXTENSIONS)


def is_source_file(name: str) -> bool:
    return _extension(name) in SOURCE_FILE_EXTENSIONS


# 우선순위 순서 (먼저 일치하는 규칙이 이김)
CLASSIFICATION_RULES: List[Tuple[Domain, Callable[[str], bool]]] = [
    (Domain.FEATURE_MODEL, is_variability_file),
    (Domain.MAPPING, is_build_file),
    (Domain.IMPLEMENTATION, is_source_file),
]


def classify(name: str) -> Domain:
    """파일 이름 하나를 도메인으로 분류"""
    for domain, predicate in CLASSIFICATION_RULES:
        if predicate(name):
            return domain
    return Domain.OTHER


def classify_diff(diff: ArtefactDiff) -> Domain:
    """diff의 이전/이후 이름 중 하나라도 상위 우선순위 도메인에 속하면 그 도메인"""
    for domain, predicate in CLASSIFICATION_RULES:
        if predicate(diff.old_name) or predicate(diff.new_name):
            return domain
    return Domain.OTHER


def file_content_type(name: str) -> ContentType:
    """파일 이름으로 내용 타입 결정"""
    extension = _extension(name)
    if extension in DATA_FILE_EXTENSIONS:
        return ContentType.DATA
    if extension in BINARY_FILE_EXTENSIONS:
        return ContentType.BINARY
    if is_source_file(name):
        return ContentType.COMPILATION_UNIT
    if extension in DOCUMENTATION_FILE_EXTENSIONS or _basename(name) in DOCUMENTATION_FILE_NAMES:
        return ContentType.DOCUMENTATION
    return ContentType.UNKNOWN


def _file_change(file_name: str, change_type: FileChangeType, diff: ArtefactDiff) -> FileChange:
    return FileChange(file_name, change_type, file_content_type(file_name), origin=diff)


def extract_file_changes(diff: ArtefactDiff) -> List[FileChange]:
    """diff 하나에서 파일 수준 변경 기록 생성
    
    이름 변경은 새 경로의 ADDED와 이전 경로의 REMOVED 두 개를 만듭니다.
    """
    change_type = diff.change_type
    if change_type in (DiffChangeType.ADD, DiffChangeType.COPY):
        return [_file_change(diff.new_path, FileChangeType.ADDED, diff)]
    if change_type == DiffChangeType.DELETE:
        return [_file_change(diff.old_path, FileChangeType.REMOVED, diff)]
    if change_type == DiffChangeType.RENAME:
        return [
            _file_change(diff.new_path, FileChangeType.ADDED, diff),
            _file_change(diff.old_path, FileChangeType.REMOVED, diff),
        ]
    return [_file_change(diff.new_path, FileChangeType.MODIFIED, diff)]
