"""Read the current HEAD of a git repository.

HEAD, loose refs, ``packed-refs`` and linked worktrees are handled by
libgit2 through pygit2, so no git executable is needed.
"""

import logging
from pathlib import Path

import pygit2

from .models import RepositoryHead

logger = logging.getLogger(__name__)

_BRANCH_PREFIX = "refs/heads/"

# pygit2 maps libgit2 failures to GitError, KeyError (not found) and
# ValueError (invalid or corrupt data, including undecodable ref files).
_GIT_ERRORS = (pygit2.GitError, KeyError, ValueError, OSError)


def find_git_dir(start: str | Path | None = None) -> Path | None:
    """Find the git directory of the repository containing ``start``.

    Walks up from ``start`` (default: the working directory), following
    ``gitdir:`` files of linked worktrees. Returns ``None`` outside of a
    repository.
    """
    try:
        git_dir = pygit2.discover_repository(str(start or Path.cwd()))
    except _GIT_ERRORS as e:
        logger.debug(f"Repository discovery failed: {e}")
        return None
    return Path(git_dir) if git_dir else None


class HeadResolver:
    """Classify a repository's HEAD as branch, detached commit or unresolved."""

    def __init__(self, git_dir: str | Path | None):
        self.git_dir = Path(git_dir) if git_dir is not None else None

    @classmethod
    def from_cwd(cls, start: str | Path | None = None) -> "HeadResolver":
        return cls(find_git_dir(start))

    def resolve(self) -> RepositoryHead:
        """Read HEAD; never raises for missing, unborn or corrupt repositories."""
        if self.git_dir is None:
            logger.debug("No git directory found")
            return RepositoryHead.unresolved()

        try:
            repo = pygit2.Repository(str(self.git_dir))
            if repo.head_is_unborn:
                logger.debug(f"HEAD in {self.git_dir} has no commits yet")
                return RepositoryHead.unresolved()
            head = repo.head
            if repo.head_is_detached:
                return RepositoryHead.commit(str(head.target))
            ref_name = head.name
            commit_id = str(head.target)
        except _GIT_ERRORS as e:
            logger.debug(f"Cannot read HEAD in {self.git_dir}: {e}")
            return RepositoryHead.unresolved()

        if not ref_name.startswith(_BRANCH_PREFIX):
            logger.debug(f"HEAD points at {ref_name}, not a local branch")
            return RepositoryHead.unresolved()
        return RepositoryHead.branch(ref_name[len(_BRANCH_PREFIX) :], commit_id)
