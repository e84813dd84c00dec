"""구현 모델

소스 파일 하나의 feature 주석(#ifdef 등) 블록과 그에 귀속된 편집을 담습니다.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from .edit import Edit


@dataclass(frozen=True)
class CodeBlock:
    """전처리기 조건으로 감싸진 코드 영역 (1부터 시작, 끝 포함)"""
    start_line: int
    end_line: int
    block_type: str
    expression: str
    constants: Tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return self.end_line - self.start_line + 1

    def encloses(self, start: int, end: int) -> bool:
        """반열린 라인 구간 [start, end) 이 블록 안에 완전히 들어가는지 여부"""
        if end <= start:
            # 빈 구간(순수 삽입 지점)은 조건 줄과 닫는 줄 사이에 있어야 함
            return self.start_line < start <= self.end_line
        return self.start_line <= start and end - 1 <= self.end_line

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start_line': self.start_line,
            'end_line': self.end_line,
            'block_type': self.block_type,
            'expression': self.expression,
            'constants': list(self.constants)
        }


@dataclass
class ImplementationModel:
    """소스 파일 하나의 구현 모델"""
    file_path: str = ""
    line_count: int = 0
    blocks: List[CodeBlock] = field(default_factory=list)
    edits: List[Edit] = field(default_factory=list)

    @classmethod
    def empty(cls) -> 'ImplementationModel':
        """아티팩트가 없는 쪽에 사용하는 빈 모델"""
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.line_count == 0 and not self.blocks

    @property
    def features(self) -> Set[str]:
        """블록에서 참조된 feature 상수 집합"""
        names: Set[str] = set()
        for block in self.blocks:
            names.update(block.constants)
        return names

    def innermost_block(self, start: int, end: int) -> Optional[CodeBlock]:
        """구간을 감싸는 가장 작은 블록"""
        candidates = [block for block in self.blocks if block.encloses(start, end)]
        if not candidates:
            return None
        return min(candidates, key=lambda block: (block.size, -block.start_line))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file_path': self.file_path,
            'line_count': self.line_count,
            'blocks': [block.to_dict() for block in self.blocks],
            'edits': [edit.to_dict() for edit in self.edits]
        }
