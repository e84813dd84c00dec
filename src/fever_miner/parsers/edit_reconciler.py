"""미할당 편집 병합

구현 진화가 feature 블록에 귀속시키지 못한 편집을 같은 경로의 FileChange 하나에 붙입니다.
일치하는 FileChange가 없으면 편집은 조용히 버려집니다.
"""

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fever_miner.change.evolution_step import EvolutionStep
from fever_miner.change.file_change import FileChange
from fever_miner.change.partial_evolution import PartialImplementationEvolution
from fever_miner.models.edit import Edit

logger = logging.getLogger(__name__)


def find_target_index(file_changes: Sequence[FileChange],
                      evolution: PartialImplementationEvolution) -> Optional[int]:
    """구현 진화의 편집을 받을 FileChange 위치

    이름이 진화 경로와 같고 같은 diff에서 만들어진 기록 중 마지막 것을 고릅니다.
    """
    for index in range(len(file_changes) - 1, -1, -1):
        change = file_changes[index]
        if change.file_name == evolution.path and change.produced_by(evolution.diff):
            return index
    return None


def dispatch_unassigned_edits(
    file_changes: Iterable[FileChange],
    implementation_changes: Iterable[PartialImplementationEvolution],
) -> Tuple[FileChange, ...]:
    """미할당 편집을 각 구현 진화에 대응하는 FileChange 하나에 병합

    편집은 대상 기록별로 모은 뒤 한 번에 정렬 병합하므로 구현 진화의 순서와 무관합니다.
    """
    changes = list(file_changes)
    pending: Dict[int, List[Edit]] = defaultdict(list)
    for evolution in implementation_changes:
        if not evolution.unassigned_edits:
            continue
        index = find_target_index(changes, evolution)
        if index is None:
            logger.debug(
                f"일치하는 파일 변경이 없어 편집 {len(evolution.unassigned_edits)}개 무시: {evolution.path}"
            )
            continue
        pending[index].extend(evolution.unassigned_edits)

    return tuple(
        change.with_edits(pending[index]) if index in pending else change
        for index, change in enumerate(changes)
    )


class EditReconciler:
    """EvolutionStep 단위 편집 병합기"""

    def reconcile(self, step: EvolutionStep) -> EvolutionStep:
        """파일 변경에 편집을 붙인 새 EvolutionStep 반환

        붙은 편집은 구현 진화의 미할당 목록에서 제거됩니다.
        """
        file_changes = dispatch_unassigned_edits(step.file_changes, step.implementation_changes)

        implementation_changes = tuple(
            replace(evolution, unassigned_edits=())
            if find_target_index(step.file_changes, evolution) is not None else evolution
            for evolution in step.implementation_changes
        )
        return replace(
            step,
            file_changes=file_changes,
            implementation_changes=implementation_changes,
        )
