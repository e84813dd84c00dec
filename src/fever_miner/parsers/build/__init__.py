"""매핑(빌드 스크립트) 추출 패키지"""

from .build_script_parser import BuildScriptParser, parse_condition
from .mapping_evolution_builder import MappingEvolutionBuilder

__all__ = [
    'BuildScriptParser',
    'parse_condition',
    'MappingEvolutionBuilder'
]
