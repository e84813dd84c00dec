"""빌드(매핑) 모델

Kbuild/Makefile이 소스 아티팩트를 어떤 조건에서 빌드 대상에 포함하는지 담습니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple


class TargetType(Enum):
    """매핑 대상 종류"""

    COMPILATION_UNIT = "compilation_unit"   # foo.o
    FOLDER = "folder"                       # subdir/
    COMPOSITE = "composite"                 # foo-objs 로 합쳐지는 대상
    OTHER = "other"


@dataclass(frozen=True)
class MappingEntry:
    """빌드 스크립트의 단일 매핑"""
    target: str
    target_type: TargetType
    condition: Optional[str] = None         # CONFIG_ 심볼, 무조건이면 None
    composite: Optional[str] = None         # foo-objs 의 foo
    guards: Tuple[str, ...] = ()            # 감싸는 ifdef/ifeq 조건들

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target': self.target,
            'target_type': self.target_type.value,
            'condition': self.condition,
            'composite': self.composite,
            'guards': list(self.guards)
        }


@dataclass
class BuildModel:
    """빌드 스크립트 하나에서 추출한 매핑 모델"""
    file_path: str = ""
    entries: List[MappingEntry] = field(default_factory=list)

    @classmethod
    def empty(cls) -> 'BuildModel':
        """아티팩트가 없는 쪽에 사용하는 빈 모델"""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def referenced_symbols(self) -> Set[str]:
        """조건과 가드에서 참조된 CONFIG_ 심볼 집합"""
        symbols: Set[str] = set()
        for entry in self.entries:
            if entry.condition:
                symbols.add(entry.condition)
            symbols.update(guard.lstrip('!') for guard in entry.guards)
        return symbols

    def entries_for(self, target: str) -> List[MappingEntry]:
        return [entry for entry in self.entries if entry.target == target]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file_path': self.file_path,
            'entries': [entry.to_dict() for entry in self.entries]
        }
