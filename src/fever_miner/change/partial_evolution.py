"""도메인별 부분 진화 기록

아티팩트 하나에 대한 변경 전/후 모델 쌍입니다. 두 쪽 모두 항상 ModelSide로 채워집니다.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from fever_miner.models.build_model import BuildModel
from fever_miner.models.edit import Edit
from fever_miner.models.implementation_model import ImplementationModel
from fever_miner.models.variability_model import VariabilityModel
from .artefact_diff import ArtefactDiff
from .model_side import ModelSide, side_to_dict


@dataclass(frozen=True)
class PartialFeatureModelEvolution:
    """가변성 모델 파일의 변경 전/후"""
    path: str
    old: ModelSide[VariabilityModel]
    new: ModelSide[VariabilityModel]

    @property
    def old_model(self) -> VariabilityModel:
        return self.old.model_or(VariabilityModel.empty())

    @property
    def new_model(self) -> VariabilityModel:
        return self.new.model_or(VariabilityModel.empty())

    def to_dict(self) -> Dict[str, Any]:
        return {'path': self.path, 'old': side_to_dict(self.old), 'new': side_to_dict(self.new)}


@dataclass(frozen=True)
class PartialMappingEvolution:
    """빌드 스크립트의 변경 전/후"""
    path: str
    old: ModelSide[BuildModel]
    new: ModelSide[BuildModel]

    @property
    def old_model(self) -> BuildModel:
        return self.old.model_or(BuildModel.empty())

    @property
    def new_model(self) -> BuildModel:
        return self.new.model_or(BuildModel.empty())

    def to_dict(self) -> Dict[str, Any]:
        return {'path': self.path, 'old': side_to_dict(self.old), 'new': side_to_dict(self.new)}


@dataclass(frozen=True)
class PartialImplementationEvolution:
    """소스 파일의 변경 전/후와 아직 파일 변경에 붙지 않은 편집"""
    path: str
    old: ModelSide[ImplementationModel]
    new: ModelSide[ImplementationModel]
    diff: ArtefactDiff
    unassigned_edits: Tuple[Edit, ...] = ()

    @property
    def old_model(self) -> ImplementationModel:
        return self.old.model_or(ImplementationModel.empty())

    @property
    def new_model(self) -> ImplementationModel:
        return self.new.model_or(ImplementationModel.empty())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'old': side_to_dict(self.old),
            'new': side_to_dict(self.new),
            'diff': self.diff.to_dict(),
            'unassigned_edits': [edit.to_dict() for edit in self.unassigned_edits]
        }
