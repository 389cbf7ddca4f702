"""Project identity for directory targets, derived from git metadata."""

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from depreport.config.file import ConfigFile
from depreport.models import ProjectIdentity, ProjectOverride
from depreport.precedence import first_present

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 5


@dataclass(frozen=True)
class GitInfo:
    """Metadata read from a git working copy."""

    remote: str | None = None
    commit: str | None = None
    branch: str | None = None


def _run_git(directory: Path, *args: str) -> str | None:
    """Run a git command in ``directory`` and return its stripped stdout."""
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
            cwd=str(directory),
        )
    except (subprocess.SubprocessError, FileNotFoundError, OSError) as e:
        logger.debug("git %s failed in %s: %s", " ".join(args), directory, e)
        return None

    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def read_git_info(directory: Path) -> Optional[GitInfo]:
    """Read remote, commit and branch of the repository at ``directory``.

    Returns:
        The git metadata, or None if the directory is not inside a git
        repository with at least one commit.
    """
    commit = _run_git(directory, "rev-parse", "HEAD")
    if commit is None:
        return None

    remote = _run_git(directory, "remote", "get-url", "origin")
    if remote and remote.endswith(".git"):
        remote = remote[:-4]

    branch = _run_git(directory, "rev-parse", "--abbrev-ref", "HEAD")
    # Detached HEAD has no branch
    if branch == "HEAD":
        branch = None

    return GitInfo(remote=remote, commit=commit, branch=branch)


def derive_directory_identity(
    directory: Path,
    override: ProjectOverride,
    config_file: Optional[ConfigFile] = None,
) -> ProjectIdentity:
    """Derive the identity of a project directory.

    Each field is taken from the CLI override, then the config file, then
    git. Without git metadata the directory name and the current Unix
    time are used as name and revision.
    """
    git = read_git_info(directory)
    if git is None:
        logger.debug("No git metadata in %s, inferring project identity", directory)
        git = GitInfo()

    file_name = config_file.project_name if config_file else None
    file_revision = config_file.revision if config_file else None
    file_branch = config_file.branch if config_file else None

    # The full remote URL, not its last segment, identifies the project on the service
    name = first_present(override.name, file_name, git.remote, directory.name)
    revision = first_present(override.revision, file_revision, git.commit)
    if revision is None:
        revision = str(int(time.time()))
    branch = first_present(override.branch, file_branch, git.branch)

    return ProjectIdentity(name=name, revision=revision, branch=branch)
