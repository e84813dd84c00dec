"""git_repository.py 테스트

raw diff 파싱, 가짜 실행기를 통한 명령 구성, 실제 git 저장소 통합 테스트입니다.
"""

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fever_miner.change.artefact_diff import DiffChangeType
from fever_miner.constants import DEV_NULL, EMPTY_TREE_ID
from fever_miner.exceptions import CommitResolutionError, ExternalToolError, MissingObjectError
from fever_miner.parsers.commit_info_extractor import CommitInfoExtractor
from fever_miner.parsers.workspace_stager import WorkspaceStager
from fever_miner.repository.git_repository import GitRepository, parse_raw_diff
from fever_miner.tools.tool_executor import ToolExecutor
from fever_miner.tools.tool_result import ToolResult

from conftest import FakeToolExecutor, KCONFIG_NEW, KCONFIG_OLD, SOURCE_NEW, SOURCE_OLD

OLD_SHA = "a" * 40
NEW_SHA = "b" * 40
ZERO = "0" * 40


def _git_output(stdout: str, returncode: int = 0) -> ToolResult:
    return ToolResult(
        success=returncode == 0,
        data={"returncode": returncode, "stdout": stdout, "stderr": ""},
        error_message=None if returncode == 0 else "git failed",
    )


@pytest.mark.unit
class TestParseRawDiff:
    """`git diff-tree -z --raw` 출력 파싱 테스트"""

    def test_all_change_kinds(self):
        output = (
            f":000000 100644 {ZERO} {NEW_SHA} A\0drivers/new.c\0"
            f":100644 000000 {OLD_SHA} {ZERO} D\0drivers/old.c\0"
            f":100644 100644 {OLD_SHA} {NEW_SHA} M\0Kconfig\0"
            f":100644 100644 {OLD_SHA} {NEW_SHA} R087\0a.map\0b.map\0"
            f":100644 100644 {OLD_SHA} {OLD_SHA} C100\0x.c\0y.c\0"
        )

        added, deleted, modified, renamed, copied = parse_raw_diff(output)

        assert (added.old_path, added.new_path, added.change_type) == (DEV_NULL, "drivers/new.c", DiffChangeType.ADD)
        assert added.old_blob_id is None and added.new_blob_id == NEW_SHA
        assert (deleted.old_path, deleted.new_path, deleted.change_type) == ("drivers/old.c", DEV_NULL, DiffChangeType.DELETE)
        assert deleted.new_blob_id is None
        assert modified.change_type == DiffChangeType.MODIFY
        assert (renamed.old_path, renamed.new_path, renamed.similarity) == ("a.map", "b.map", 87)
        assert renamed.change_type == DiffChangeType.RENAME
        assert copied.change_type == DiffChangeType.COPY

    def test_empty_output(self):
        assert parse_raw_diff("") == []


@pytest.mark.unit
class TestGitRepository:
    """가짜 실행기를 사용한 GitRepository 테스트"""

    def _repository(self, *results: ToolResult):
        executor = MagicMock(spec=ToolExecutor)
        executor.execute_tool_call.side_effect = list(results)
        return GitRepository("/repo", executor), executor

    def test_resolve(self):
        repository, executor = self._repository(_git_output(f"{NEW_SHA}\n"))

        assert repository.resolve("HEAD") == NEW_SHA
        executor.execute_tool_call.assert_called_once_with(
            "execute_command",
            {"command": ["git", "-C", "/repo", "rev-parse", "--verify", "--quiet", "HEAD^{commit}"]}
        )

    def test_resolve_failure(self):
        repository, _ = self._repository(_git_output("", returncode=1))

        with pytest.raises(CommitResolutionError):
            repository.resolve("nope")

    def test_parent_of_root_commit(self):
        repository, _ = self._repository(_git_output("", returncode=1))

        assert repository.parent_of(OLD_SHA) is None

    def test_first_parent_chain(self):
        repository, executor = self._repository(_git_output(f"{NEW_SHA}\n{OLD_SHA}\n"))

        assert repository.first_parent_chain(NEW_SHA, 2) == [NEW_SHA, OLD_SHA]
        command = executor.execute_tool_call.call_args.args[1]["command"]
        assert "--first-parent" in command and "--max-count=2" in command

    def test_diff_against_empty_tree(self):
        repository, executor = self._repository(_git_output(""))

        repository.diff(None, NEW_SHA)

        command = executor.execute_tool_call.call_args.args[1]["command"]
        assert command[-2:] == [EMPTY_TREE_ID, NEW_SHA]

    def test_diff_failure_raises(self):
        repository, _ = self._repository(_git_output("", returncode=128))

        with pytest.raises(ExternalToolError):
            repository.diff(OLD_SHA, NEW_SHA)

    def test_restore_blob_missing(self):
        repository, executor = self._repository(_git_output("", returncode=128))

        with pytest.raises(MissingObjectError):
            repository.restore_blob(OLD_SHA, "/tmp/out")
        params = executor.execute_tool_call.call_args.args[1]
        assert params["stdout_path"] == "/tmp/out"

    def test_closed_repository_rejects_commands(self):
        repository, _ = self._repository()
        repository.close()

        with pytest.raises(ExternalToolError):
            repository.resolve("HEAD")


def _git(repo: Path, *args: str) -> str:
    return subprocess.run(
        ["git", "-C", str(repo)] + list(args),
        check=True, capture_output=True, text=True
    ).stdout.strip()


@pytest.fixture
def git_repo(temp_dir) -> Path:
    """Kconfig/Makefile/소스 파일을 두 번 커밋한 실제 git 저장소"""
    repo = temp_dir / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.email", "miner@example.com")
    _git(repo, "config", "user.name", "miner")

    (repo / "drivers").mkdir()
    (repo / "drivers" / "Kconfig").write_text(KCONFIG_OLD, encoding='utf-8')
    (repo / "drivers" / "Makefile").write_text("obj-$(CONFIG_FOO) += foo.o\n", encoding='utf-8')
    (repo / "drivers" / "foo.c").write_text(SOURCE_OLD, encoding='utf-8')
    _git(repo, "add", "-A")
    _git(repo, "commit", "-q", "-m", "initial")

    (repo / "drivers" / "Kconfig").write_text(KCONFIG_NEW, encoding='utf-8')
    (repo / "drivers" / "Makefile").write_text(
        "obj-$(CONFIG_FOO) += foo.o\nobj-$(CONFIG_BAZ) += baz.o\n", encoding='utf-8'
    )
    (repo / "drivers" / "foo.c").write_text(SOURCE_NEW, encoding='utf-8')
    (repo / "README.md").write_text("# drivers\n", encoding='utf-8')
    _git(repo, "add", "-A")
    _git(repo, "commit", "-q", "-m", "add baz")
    return repo


@pytest.mark.integration
@pytest.mark.skipif(shutil.which("git") is None, reason="git이 설치되어 있지 않음")
class TestGitRepositoryIntegration:
    """실제 git 저장소 통합 테스트"""

    def test_diff_and_restore(self, git_repo, temp_dir):
        repository = GitRepository(str(git_repo))
        head = repository.resolve("HEAD")
        parent = repository.parent_of(head)

        diffs = repository.diff(parent, head)

        assert sorted(diff.new_path for diff in diffs) == [
            "README.md", "drivers/Kconfig", "drivers/Makefile", "drivers/foo.c"
        ]
        kconfig = next(diff for diff in diffs if diff.new_path == "drivers/Kconfig")
        target = temp_dir / "restored"
        repository.restore_blob(kconfig.old_blob_id, str(target))
        assert target.read_text(encoding='utf-8') == KCONFIG_OLD

    def test_root_commit_diff_lists_added_files(self, git_repo):
        repository = GitRepository(str(git_repo))
        root = repository.resolve("HEAD~1")

        assert repository.parent_of(root) is None
        diffs = repository.diff(None, root)
        assert {diff.change_type for diff in diffs} == {DiffChangeType.ADD}

    def test_extract_step_from_git(self, git_repo, fever_config):
        fever_config.repository.path = str(git_repo)
        repository = GitRepository(str(git_repo))

        with CommitInfoExtractor(
            fever_config,
            repository=repository,
            tool_executor=FakeToolExecutor(),
            stager=WorkspaceStager(fever_config.extraction.scratch_dir),
        ) as extractor:
            step = extractor.extract_step(["HEAD"])

        assert len(step.file_changes) == 4
        assert len(step.feature_model_changes) == 1
        assert len(step.mapping_changes) == 1
        assert len(step.implementation_changes) == 1
        assert step.implementation_changes[0].unassigned_edits == ()
