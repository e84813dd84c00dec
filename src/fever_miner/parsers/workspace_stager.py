"""임시 작업 공간 관리

도메인 빌더가 만드는 모든 임시 파일/디렉토리를 등록하고
추출 호출마다 한 번 일괄 정리합니다.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

from fever_miner.exceptions import WorkspaceError


class WorkspaceStager:
    """임시 파일/디렉토리 생명주기 관리자"""

    def __init__(self, base_dir: Optional[str] = None):
        """
        Args:
            base_dir: 임시 파일을 만들 디렉토리 (None이면 시스템 기본값)
        """
        self.base_dir = base_dir
        self._registered: List[Path] = []
        self.logger = logging.getLogger(__name__)

        if base_dir:
            os.makedirs(base_dir, exist_ok=True)

    @property
    def registered_paths(self) -> List[Path]:
        """마지막 정리 이후 등록된 경로 (등록 순)"""
        return list(self._registered)

    def register(self, path) -> Path:
        """경로를 정리 대상으로 등록"""
        registered = Path(path)
        if registered not in self._registered:
            self._registered.append(registered)
        return registered

    def create_directory(self, prefix: str) -> Path:
        """등록된 임시 디렉토리 생성
        
        Raises:
            WorkspaceError: 디렉토리를 만들 수 없는 경우
        """
        try:
            path = tempfile.mkdtemp(prefix=prefix, dir=self.base_dir)
        except OSError as e:
            raise WorkspaceError(f"Could not create temp directory ({prefix}): {e}")
        return self.register(path)

    def create_subdirectory(self, parent: Path, name: str) -> Path:
        """등록된 디렉토리 안에 하위 디렉토리 생성"""
        path = Path(parent) / name
        try:
            path.mkdir()
        except OSError as e:
            raise WorkspaceError(f"Could not create temp directory: {path}: {e}")
        return self.register(path)

    def create_file(self, prefix: str, suffix: str = "", directory: Optional[Path] = None) -> Path:
        """등록된 빈 임시 파일 생성"""
        try:
            fd, path = tempfile.mkstemp(
                prefix=prefix, suffix=suffix,
                dir=str(directory) if directory else self.base_dir
            )
            os.close(fd)
        except OSError as e:
            raise WorkspaceError(f"Could not create temp file ({prefix}): {e}")
        return self.register(path)

    def create_named_file(self, directory: Path, name: str) -> Path:
        """이름이 정해진 빈 파일 생성 (이미 있으면 비움)"""
        path = Path(directory) / name
        try:
            path.write_bytes(b"")
        except OSError as e:
            raise WorkspaceError(f"Could not create file: {path}: {e}")
        return self.register(path)

    def sweep(self) -> int:
        """등록된 모든 경로 삭제
        
        Returns:
            실제로 삭제한 경로 수
        """
        removed = 0
        # 나중에 만든 것부터 (하위 항목 먼저)
        for path in reversed(self._registered):
            try:
                if path.is_dir():
                    shutil.rmtree(path)
                    removed += 1
                elif path.exists():
                    path.unlink()
                    removed += 1
            except OSError as e:
                self.logger.warning(f"임시 경로 삭제 실패: {path} - {e}")
        self.logger.debug(f"작업 공간 정리 완료: {removed}/{len(self._registered)}개 삭제")
        self._registered = []
        return removed

    def __enter__(self) -> 'WorkspaceStager':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.sweep()
