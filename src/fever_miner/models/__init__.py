"""도메인별 모델 패키지

가변성 모델, 빌드 모델, 구현 모델과 저수준 편집 기록을 제공합니다.
"""

from .edit import Edit, EditKind
from .variability_model import Choice, Feature, VariabilityModel
from .build_model import BuildModel, MappingEntry, TargetType
from .implementation_model import CodeBlock, ImplementationModel

__all__ = [
    'Edit',
    'EditKind',
    'Choice',
    'Feature',
    'VariabilityModel',
    'BuildModel',
    'MappingEntry',
    'TargetType',
    'CodeBlock',
    'ImplementationModel'
]
