from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from fever_miner.models.edit import Edit
from .artefact_diff import ArtefactDiff


class FileChangeType(Enum):
    """파일 수준 변경 종류"""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class ContentType(Enum):
    """파일 내용 타입"""

    DATA = "data"
    BINARY = "binary"
    COMPILATION_UNIT = "compilation_unit"
    DOCUMENTATION = "documentation"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FileChange:
    """파일 수준 변경 기록

    origin은 이 기록을 만든 diff이며 편집 병합 대상을 고를 때만 사용됩니다.
    """
    file_name: str
    change_type: FileChangeType
    content_type: ContentType = ContentType.UNKNOWN
    edits: Tuple[Edit, ...] = ()
    origin: Optional[ArtefactDiff] = field(default=None, compare=False, repr=False)

    def with_edits(self, edits: Iterable[Edit]) -> 'FileChange':
        """편집을 병합한 새 FileChange 반환 (다중집합 합, 정렬되어 순서 무관)"""
        merged = sorted(list(self.edits) + list(edits), key=lambda e: e.sort_key)
        return replace(self, edits=tuple(merged))

    def produced_by(self, diff: ArtefactDiff) -> bool:
        """이 기록이 주어진 diff에서 만들어졌는지 여부 (출처를 모르면 True)"""
        return self.origin is None or self.origin == diff

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화를 위한 딕셔너리 변환"""
        return {
            'file_name': self.file_name,
            'change_type': self.change_type.value,
            'content_type': self.content_type.value,
            'edits': [edit.to_dict() for edit in self.edits]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FileChange':
        """딕셔너리에서 FileChange 객체 생성"""
        return cls(
            file_name=data['file_name'],
            change_type=FileChangeType(data['change_type']),
            content_type=ContentType(data['content_type']),
            edits=tuple(Edit.from_dict(edit) for edit in data.get('edits', []))
        )
