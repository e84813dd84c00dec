from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional, Tuple
import json

from .file_change import FileChange
from .partial_evolution import (
    PartialFeatureModelEvolution,
    PartialImplementationEvolution,
    PartialMappingEvolution,
)


@dataclass(frozen=True)
class EvolutionStep:
    """추출 호출 한 번의 결과 (반환 후 변경되지 않음)
    
    add_* 메서드는 모두 새 EvolutionStep을 반환합니다.
    """
    commit_ids: Tuple[str, ...] = ()
    file_changes: Tuple[FileChange, ...] = ()
    feature_model_changes: Tuple[PartialFeatureModelEvolution, ...] = ()
    mapping_changes: Tuple[PartialMappingEvolution, ...] = ()
    implementation_changes: Tuple[PartialImplementationEvolution, ...] = ()

    def add_commit(self, commit_id: str) -> 'EvolutionStep':
        return replace(self, commit_ids=self.commit_ids + (commit_id,))

    def add_file_changes(self, changes: Iterable[FileChange]) -> 'EvolutionStep':
        return replace(self, file_changes=self.file_changes + tuple(changes))

    def add_feature_model_change(self, change: PartialFeatureModelEvolution) -> 'EvolutionStep':
        return replace(self, feature_model_changes=self.feature_model_changes + (change,))

    def add_mapping_change(self, change: PartialMappingEvolution) -> 'EvolutionStep':
        return replace(self, mapping_changes=self.mapping_changes + (change,))

    def add_implementation_change(self, change: PartialImplementationEvolution) -> 'EvolutionStep':
        return replace(self, implementation_changes=self.implementation_changes + (change,))

    def find_file_change(self, file_name: str) -> Optional[FileChange]:
        for change in self.file_changes:
            if change.file_name == file_name:
                return change
        return None

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화를 위한 딕셔너리 변환"""
        return {
            'commit_ids': list(self.commit_ids),
            'file_changes': [change.to_dict() for change in self.file_changes],
            'feature_model_changes': [change.to_dict() for change in self.feature_model_changes],
            'mapping_changes': [change.to_dict() for change in self.mapping_changes],
            'implementation_changes': [change.to_dict() for change in self.implementation_changes]
        }

    def save_to_json(self, filepath: str) -> None:
        """JSON 파일로 저장"""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
