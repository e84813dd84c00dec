"""가변성 모델 추출 패키지"""

from .feature_model_parser import FeatureModelParser
from .feature_model_evolution_builder import (
    FeatureModelEvolutionBuilder,
    sanitize_kconfig,
    strip_unsupported_lines,
)

__all__ = [
    'FeatureModelParser',
    'FeatureModelEvolutionBuilder',
    'sanitize_kconfig',
    'strip_unsupported_lines'
]
