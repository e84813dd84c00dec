"""설정 관리 패키지"""

from .settings import (
    CppStatsConfig,
    ExtractionSettings,
    FeverConfig,
    LoggingConfig,
    RepositoryConfig,
    UndertakerConfig,
    get_default_config_path,
    load_config,
)

__all__ = [
    "CppStatsConfig",
    "ExtractionSettings",
    "FeverConfig",
    "LoggingConfig",
    "RepositoryConfig",
    "UndertakerConfig",
    "get_default_config_path",
    "load_config",
]
