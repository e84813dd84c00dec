"""workspace_stager.py 단위 테스트"""

import os
from unittest.mock import patch

import pytest

from fever_miner.exceptions import WorkspaceError
from fever_miner.parsers.workspace_stager import WorkspaceStager


@pytest.mark.unit
class TestWorkspaceStager:
    """임시 작업 공간 관리 테스트"""

    def test_created_paths_are_registered(self, scratch_dir):
        """생성한 파일/디렉토리가 등록되는지 테스트"""
        stager = WorkspaceStager(str(scratch_dir))
        project = stager.create_directory("prj")
        source = stager.create_subdirectory(project, "source")
        staged = stager.create_named_file(source, "src__old_0.c")
        manifest = stager.create_file("cpp_stats_input", ".in")

        assert stager.registered_paths == [project, source, staged, manifest]
        assert staged.is_file() and manifest.is_file()
        assert manifest.suffix == ".in"

    def test_sweep_removes_everything(self, scratch_dir):
        """sweep 후 임시 경로가 남지 않는지 테스트"""
        stager = WorkspaceStager(str(scratch_dir))
        project = stager.create_directory("prj")
        stager.create_named_file(stager.create_subdirectory(project, "source"), "a.c")
        stager.create_file("fm_", ".fm")

        removed = stager.sweep()

        assert removed >= 2
        assert stager.registered_paths == []
        assert os.listdir(scratch_dir) == []

    def test_repeated_sweeps_leave_no_growth(self, scratch_dir):
        """여러 번 생성/정리해도 디렉토리가 늘지 않는지 테스트"""
        stager = WorkspaceStager(str(scratch_dir))
        for _ in range(5):
            stager.create_directory("prj")
            stager.create_file("mapping_old_0_", ".map")
            stager.sweep()

        assert os.listdir(scratch_dir) == []

    def test_sweep_tolerates_already_deleted_paths(self, scratch_dir):
        """이미 지워진 경로가 있어도 sweep이 실패하지 않는지 테스트"""
        stager = WorkspaceStager(str(scratch_dir))
        staged = stager.create_file("fm_", ".var")
        staged.unlink()

        assert stager.sweep() == 0

    def test_context_manager_sweeps_on_exit(self, scratch_dir):
        """with 블록 종료 시 정리 테스트"""
        with WorkspaceStager(str(scratch_dir)) as stager:
            stager.create_directory("prj")
            assert os.listdir(scratch_dir)

        assert os.listdir(scratch_dir) == []

    def test_creation_failure_raises_workspace_error(self, scratch_dir):
        """임시 디렉토리 생성 실패 시 WorkspaceError 테스트"""
        stager = WorkspaceStager(str(scratch_dir))
        with patch('tempfile.mkdtemp', side_effect=OSError("disk full")):
            with pytest.raises(WorkspaceError):
                stager.create_directory("prj")
