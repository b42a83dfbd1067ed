"""Git convenience helpers for scripts.

Commands run inside the given repository through ``cwd`` rather than by
changing the process working directory.
"""

import logging
import subprocess
from datetime import datetime
from pathlib import Path

from sysbridge.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)

# strftime format of the default commit message
COMMIT_TIMESTAMP_FORMAT = "%Y-%m-%d_%H:%M:%S"

GIT_LOG_FORMAT = "--pretty=format:%H %ad %s"


def _git(args: list[str], repo: str | Path | None, *, input: str | None = None) -> CommandResult | None:
    """Run a git command, returning None if git could not be executed."""
    cwd = str(repo) if repo else None
    try:
        return run_command(["git", *args], cwd=cwd, timeout=None, input=input)
    except (FileNotFoundError, OSError) as e:
        logger.warning("git %s failed to start: %s", args[0], e)
        return None


def _run_all(commands: list[list[str]], repo: str | Path | None) -> bool:
    """Run git commands in order, stopping at the first failure."""
    for args in commands:
        result = _git(args, repo)
        if result is None:
            return False
        if not result.success:
            logger.warning("git %s failed: %s", " ".join(args), result.stderr.strip())
            return False
    return True


def add_and_commit(
    repo: str | Path | None = None,
    message: str | None = None,
    body: str | None = None,
) -> bool:
    """Stage all changes and commit them.

    Args:
        repo: Repository directory. Defaults to the current directory.
        message: Commit subject. Defaults to the current timestamp.
        body: Optional second message paragraph.

    Returns:
        True if both ``git add`` and ``git commit`` succeed.
    """
    subject = message or datetime.now().strftime(COMMIT_TIMESTAMP_FORMAT)
    commit = ["commit", "-m", subject]
    if body:
        commit += ["-m", body]
    return _run_all([["add", "-A", "."], commit], repo)


def reset_and_cleanup(commit_ref: str, repo: str | Path | None = None) -> bool:
    """Hard-reset to a commit and prune everything no longer reachable.

    Runs ``git reset --hard``, expires the reflog and runs an aggressive gc.

    Args:
        commit_ref: Commit to reset to. An empty value is rejected.
        repo: Repository directory. Defaults to the current directory.

    Returns:
        True if all three commands succeed.
    """
    if not commit_ref:
        return False
    return _run_all(
        [
            ["reset", "--hard", commit_ref],
            ["reflog", "expire", "--expire=now", "--all"],
            ["gc", "--prune=now", "--aggressive"],
        ],
        repo,
    )


def select_commit(repo: str | Path | None = None) -> str | None:
    """Let the user pick a commit with fzf.

    The log (with ISO dates) is piped into fzf, which draws its interface
    on the terminal and only the chosen line is captured.

    Args:
        repo: Repository directory. Defaults to the current directory.

    Returns:
        Hash of the selected commit, or None if nothing was selected or
        git/fzf failed.
    """
    log = _git(["log", "--date=iso", GIT_LOG_FORMAT], repo)
    if log is None or not log.success:
        return None

    try:
        picked = run_command(
            ["fzf", "--ansi", "--no-sort", "--tac"],
            timeout=None,
            input=log.stdout,
        )
    except (FileNotFoundError, OSError, subprocess.SubprocessError) as e:
        logger.warning("fzf failed to start: %s", e)
        return None

    if not picked.success:
        return None
    fields = picked.stdout.split()
    return fields[0] if fields else None
