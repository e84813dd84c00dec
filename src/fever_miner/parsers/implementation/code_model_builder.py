"""구현 모델 생성

스테이징된 소스 파일과 feature location 목록으로 ImplementationModel을 만들고,
변경 전/후 파일의 라인 diff를 편집(Edit)으로 바꿔 블록에 귀속시킵니다.
"""

import difflib
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from fever_miner.models.edit import Edit, EditKind
from fever_miner.models.implementation_model import ImplementationModel
from .feature_location_parser import FeatureLocation

logger = logging.getLogger(__name__)

_OPCODE_KINDS = {
    'insert': EditKind.INSERT,
    'delete': EditKind.DELETE,
    'replace': EditKind.REPLACE,
}


def read_lines(path: Path) -> List[str]:
    return path.read_text(encoding='utf-8', errors='replace').splitlines()


def compute_edits(old_lines: Sequence[str], new_lines: Sequence[str]) -> List[Edit]:
    """라인 diff → 미할당 편집 목록 (1부터 시작하는 반열린 구간)"""
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    edits = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            continue
        edits.append(Edit(_OPCODE_KINDS[tag], i1 + 1, i2 + 1, j1 + 1, j2 + 1))
    return edits


class CodeModelBuilder:
    """ImplementationModel 생성기"""

    def build_model(self, source_file: Path, locations: List[FeatureLocation],
                    artifact_path: str) -> ImplementationModel:
        """스테이징된 파일 하나의 모델 생성

        Args:
            source_file: 스테이징된 소스 파일
            locations: 스캐너가 보고한 전체 feature location
            artifact_path: 저장소 안의 원래 경로
        """
        blocks = [
            location.to_code_block()
            for location in locations
            if location.describes(source_file.name)
        ]
        blocks.sort(key=lambda block: (block.start_line, block.end_line))
        return ImplementationModel(
            file_path=artifact_path,
            line_count=len(read_lines(source_file)),
            blocks=blocks,
        )

    def assign_edits(self, edits: List[Edit], old_model: ImplementationModel,
                     new_model: ImplementationModel) -> Tuple[Edit, ...]:
        """편집을 가장 안쪽 블록에 귀속

        이전 범위는 이전 모델의 블록에서, 새 범위는 새 모델의 블록에서 찾습니다.
        귀속된 편집은 해당 모델의 edits에 추가됩니다.

        Returns:
            어느 블록에도 귀속되지 않은 편집
        """
        unassigned = []
        for edit in edits:
            block = old_model.innermost_block(edit.old_start, edit.old_end)
            if block is not None:
                old_model.edits.append(edit.assigned_to(block.expression))
                continue

            block = new_model.innermost_block(edit.new_start, edit.new_end)
            if block is not None:
                new_model.edits.append(edit.assigned_to(block.expression))
                continue

            unassigned.append(edit)

        logger.debug(f"편집 {len(edits)}개 중 {len(edits) - len(unassigned)}개 귀속")
        return tuple(unassigned)
