"""설정 관리 모듈

YAML 설정 파일을 로드하고 검증하는 기능을 제공합니다.
Pydantic을 사용하여 타입 안전성과 검증을 보장합니다.
"""

import os
from typing import Optional
from pathlib import Path
import yaml
from pydantic import BaseModel, Field, field_validator
import logging

from fever_miner.constants import FEATURE_LOCATIONS_FILE

logger = logging.getLogger(__name__)


class RepositoryConfig(BaseModel):
    """대상 저장소 설정"""
    path: str = "."

    @field_validator('path')
    @classmethod
    def validate_path_exists(cls, v):
        if not os.path.exists(v):
            logger.warning(f"Repository path does not exist: {v}")
        return v


class CppStatsConfig(BaseModel):
    """feature location 스캐너(cppstats) 설정"""
    executable: str = "cppstats"
    path_env: Optional[str] = None          # 스캐너 실행 시 PATH 환경변수
    output_file_name: str = FEATURE_LOCATIONS_FILE
    timeout_seconds: Optional[int] = Field(default=None, gt=0)


class UndertakerConfig(BaseModel):
    """설정 모델 덤퍼(undertaker dumpconf) 설정"""
    dumpconf: str = "dumpconf"
    timeout_seconds: Optional[int] = Field(default=None, gt=0)


class ExtractionSettings(BaseModel):
    """추출 설정"""
    window_size: int = Field(default=2, ge=2)
    scratch_dir: Optional[str] = None       # None이면 시스템 임시 디렉토리
    strict_exit_codes: bool = True          # 외부 도구 비정상 종료를 치명적 오류로 처리
    output_dir: str = "./fever-results"


class LoggingConfig(BaseModel):
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class FeverConfig(BaseModel):
    """전체 추출 설정"""
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    cppstats: CppStatsConfig = Field(default_factory=CppStatsConfig)
    undertaker: UndertakerConfig = Field(default_factory=UndertakerConfig)
    logging: Optional[LoggingConfig] = None

    def get_output_path(self, *path_parts: str) -> str:
        """출력 디렉토리 기준 경로 생성"""
        return os.path.join(self.extraction.output_dir, *path_parts)

    def create_output_dirs(self) -> None:
        """필요한 출력 디렉토리 생성"""
        os.makedirs(self.extraction.output_dir, exist_ok=True)
        logger.debug(f"Created directory: {self.extraction.output_dir}")


def load_config(config_path: str) -> FeverConfig:
    """설정 파일 로드
    
    Args:
        config_path: 설정 파일 경로
        
    Returns:
        로드된 설정 객체
        
    Raises:
        FileNotFoundError: 설정 파일이 존재하지 않는 경우
        ValueError: 설정 파일 형식이 잘못된 경우
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        config = FeverConfig(**config_data)
        logger.info(f"Loaded configuration from: {config_path}")
        return config

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML format: {e}")
    except Exception as e:
        raise ValueError(f"Failed to load config: {e}")


def get_default_config_path() -> str:
    """기본 설정 파일 경로 반환"""
    # 현재 디렉토리에서 설정 파일 찾기
    current_dir_config = "./configs/fever-miner-config.yml"
    if os.path.exists(current_dir_config):
        return current_dir_config
    
    # 패키지 디렉토리에서 설정 파일 찾기
    package_dir = Path(__file__).parent.parent.parent.parent
    package_config = package_dir / "configs" / "fever-miner-config.yml"
    if package_config.exists():
        return str(package_config)
    
    raise FileNotFoundError("Default config file not found")
