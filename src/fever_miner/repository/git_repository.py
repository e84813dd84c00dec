"""git CLI 기반 저장소 접근

모든 git 호출은 ToolExecutor의 execute_command 도구를 통해 수행됩니다.
"""

import logging
from typing import List, Optional

from fever_miner.change.artefact_diff import ArtefactDiff, DiffChangeType
from fever_miner.constants import DEV_NULL, EMPTY_TREE_ID
from fever_miner.exceptions import CommitResolutionError, ExternalToolError, MissingObjectError
from fever_miner.tools.tool_executor import ToolExecutor
from fever_miner.tools.tool_result import ToolResult
from .repository_access import RepositoryAccess


class GitRepository(RepositoryAccess):
    """git 명령어로 구현한 저장소 접근"""

    def __init__(self, repo_path: str, tool_executor: Optional[ToolExecutor] = None):
        """
        Args:
            repo_path: git 작업 트리 또는 bare 저장소 경로
            tool_executor: 명령어 실행기
        """
        self.repo_path = repo_path
        self.tool_executor = tool_executor or ToolExecutor()
        self.logger = logging.getLogger(__name__)
        self._closed = False

    def resolve(self, commit_id: str) -> str:
        result = self._execute_git_command(
            ["rev-parse", "--verify", "--quiet", f"{commit_id}^{{commit}}"]
        )
        if not result.success:
            raise CommitResolutionError(f"Cannot resolve commit: {commit_id}")
        return result.data['stdout'].strip()

    def first_parent_chain(self, commit_id: str, count: int) -> List[str]:
        if count <= 0:
            return []
        result = self._execute_git_command(
            ["rev-list", "--first-parent", f"--max-count={count}", commit_id]
        )
        if not result.success:
            raise CommitResolutionError(f"Cannot walk history of: {commit_id}")
        return [line.strip() for line in result.data['stdout'].splitlines() if line.strip()]

    def parent_of(self, commit_id: str) -> Optional[str]:
        result = self._execute_git_command(
            ["rev-parse", "--verify", "--quiet", f"{commit_id}^1"]
        )
        if not result.success:
            # 루트 커밋
            return None
        return result.data['stdout'].strip() or None

    def diff(self, base: Optional[str], target: str) -> List[ArtefactDiff]:
        result = self._execute_git_command([
            "diff-tree", "-r", "-z", "--raw", "--no-abbrev", "-M", "-C",
            base or EMPTY_TREE_ID, target
        ])
        result.raise_for_status("git diff-tree")
        return parse_raw_diff(result.data['stdout'])

    def restore_blob(self, blob_id: str, target_path: str) -> None:
        result = self._execute_git_command(
            ["cat-file", "blob", blob_id], stdout_path=target_path
        )
        if not result.success:
            raise MissingObjectError(f"Missing object {blob_id}: {result.error_message}")

    def close(self) -> None:
        if not self._closed:
            self.logger.debug(f"저장소 핸들 해제: {self.repo_path}")
            self._closed = True

    def _execute_git_command(self, args: List[str], stdout_path: Optional[str] = None) -> ToolResult:
        """git 명령어 실행"""
        if self._closed:
            raise ExternalToolError("Repository handle already closed", tool_name="git")
        parameters = {"command": ["git", "-C", self.repo_path] + args}
        if stdout_path:
            parameters["stdout_path"] = stdout_path
        return self.tool_executor.execute_tool_call("execute_command", parameters)


def parse_raw_diff(output: str) -> List[ArtefactDiff]:
    """`git diff-tree -z --raw` 출력 파싱
    
    레코드 형식: ":<old mode> <new mode> <old sha> <new sha> <status>\\0<path>\\0[<path>\\0]"
    """
    diffs: List[ArtefactDiff] = []
    tokens = output.split('\0')
    index = 0
    while index < len(tokens):
        header = tokens[index]
        index += 1
        if not header.startswith(':'):
            continue

        parts = header[1:].split()
        if len(parts) < 5:
            continue
        old_sha, new_sha, status = parts[2], parts[3], parts[4]
        kind = status[0]

        if kind in ('R', 'C'):
            old_path, new_path = tokens[index], tokens[index + 1]
            index += 2
            similarity = int(status[1:]) if status[1:].isdigit() else 100
            change_type = DiffChangeType.RENAME if kind == 'R' else DiffChangeType.COPY
            diffs.append(ArtefactDiff(old_path, new_path, change_type, old_sha, new_sha, similarity))
            continue

        path = tokens[index]
        index += 1
        if kind == 'A':
            diffs.append(ArtefactDiff(DEV_NULL, path, DiffChangeType.ADD, None, new_sha))
        elif kind == 'D':
            diffs.append(ArtefactDiff(path, DEV_NULL, DiffChangeType.DELETE, old_sha, None))
        else:
            # M, T(타입 변경) 모두 수정으로 취급
            diffs.append(ArtefactDiff(path, path, DiffChangeType.MODIFY, old_sha, new_sha))
    return diffs
