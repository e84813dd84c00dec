from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class EditKind(Enum):
    """라인 단위 편집 종류"""

    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"


@dataclass(frozen=True)
class Edit:
    """구현 파일의 저수준 편집
    
    라인 범위는 1부터 시작하는 반열린 구간 [start, end) 입니다.
    삽입은 old 범위가, 삭제는 new 범위가 비어 있습니다.
    """
    kind: EditKind
    old_start: int
    old_end: int
    new_start: int
    new_end: int
    feature_expression: Optional[str] = None   # None이면 미할당 편집

    @property
    def old_line_count(self) -> int:
        return self.old_end - self.old_start

    @property
    def new_line_count(self) -> int:
        return self.new_end - self.new_start

    @property
    def is_assigned(self) -> bool:
        return self.feature_expression is not None

    @property
    def sort_key(self) -> Tuple[int, int, int, int, str, str]:
        """병합 순서와 무관한 결과를 위한 전체 순서"""
        return (self.old_start, self.old_end, self.new_start, self.new_end,
                self.kind.value, self.feature_expression or "")

    def assigned_to(self, expression: str) -> 'Edit':
        return Edit(self.kind, self.old_start, self.old_end,
                    self.new_start, self.new_end, expression)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'old_start': self.old_start,
            'old_end': self.old_end,
            'new_start': self.new_start,
            'new_end': self.new_end,
            'feature_expression': self.feature_expression
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Edit':
        return cls(
            kind=EditKind(data['kind']),
            old_start=data['old_start'],
            old_end=data['old_end'],
            new_start=data['new_start'],
            new_end=data['new_end'],
            feature_expression=data.get('feature_expression')
        )
