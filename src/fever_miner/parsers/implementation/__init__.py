"""소스 파일(구현) 도메인"""

from .feature_location_parser import FeatureLocation, FeatureLocationParser
from .code_model_builder import CodeModelBuilder, compute_edits
from .implementation_evolution_builder import ImplementationEvolutionBuilder

__all__ = [
    'FeatureLocation',
    'FeatureLocationParser',
    'CodeModelBuilder',
    'compute_edits',
    'ImplementationEvolutionBuilder',
]
