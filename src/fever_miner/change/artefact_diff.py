from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
import posixpath

from fever_miner.constants import DEV_NULL, ZERO_OBJECT_ID


class DiffChangeType(Enum):
    """저장소 diff의 변경 종류"""

    ADD = "add"
    DELETE = "delete"
    MODIFY = "modify"
    RENAME = "rename"
    COPY = "copy"


def normalize_blob_id(blob_id: Optional[str]) -> Optional[str]:
    """zero id나 빈 문자열은 부재 핸들(None)로 정규화"""
    if not blob_id or set(blob_id) == {'0'}:
        return None
    return blob_id


@dataclass(frozen=True)
class ArtefactDiff:
    """커밋 윈도우 안에서의 단일 아티팩트 변경"""
    old_path: str
    new_path: str
    change_type: DiffChangeType
    old_blob_id: Optional[str] = None
    new_blob_id: Optional[str] = None
    similarity: int = 100

    def __post_init__(self):
        object.__setattr__(self, 'old_blob_id', normalize_blob_id(self.old_blob_id))
        object.__setattr__(self, 'new_blob_id', normalize_blob_id(self.new_blob_id))

    @property
    def old_name(self) -> str:
        """변경 전 파일 이름 (경로 제외)"""
        return posixpath.basename(self.old_path or "")

    @property
    def new_name(self) -> str:
        """변경 후 파일 이름 (경로 제외)"""
        return posixpath.basename(self.new_path or "")

    @property
    def has_old_content(self) -> bool:
        return self.old_blob_id is not None

    @property
    def has_new_content(self) -> bool:
        return self.new_blob_id is not None

    @classmethod
    def added(cls, path: str, blob_id: str) -> 'ArtefactDiff':
        return cls(DEV_NULL, path, DiffChangeType.ADD, None, blob_id)

    @classmethod
    def deleted(cls, path: str, blob_id: str) -> 'ArtefactDiff':
        return cls(path, DEV_NULL, DiffChangeType.DELETE, blob_id, None)

    @classmethod
    def modified(cls, path: str, old_blob_id: str, new_blob_id: str) -> 'ArtefactDiff':
        return cls(path, path, DiffChangeType.MODIFY, old_blob_id, new_blob_id)

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화를 위한 딕셔너리 변환"""
        return {
            'old_path': self.old_path,
            'new_path': self.new_path,
            'change_type': self.change_type.value,
            'old_blob_id': self.old_blob_id or ZERO_OBJECT_ID,
            'new_blob_id': self.new_blob_id or ZERO_OBJECT_ID,
            'similarity': self.similarity
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ArtefactDiff':
        """딕셔너리에서 ArtefactDiff 객체 생성"""
        return cls(
            old_path=data['old_path'],
            new_path=data['new_path'],
            change_type=DiffChangeType(data['change_type']),
            old_blob_id=data.get('old_blob_id'),
            new_blob_id=data.get('new_blob_id'),
            similarity=data.get('similarity', 100)
        )
