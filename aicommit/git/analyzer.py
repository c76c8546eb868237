"""Git Analyzer - Read staged changes and run the commit."""

import subprocess


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitAnalyzer:
    """Reads the staged diff and commits through the git CLI."""

    def __init__(self):
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def get_staged_diff(self) -> str:
        """Unified diff of everything currently staged."""
        return self._run_git('diff', '--staged')

    def run_commit(self, message: str) -> int:
        """Run ``git commit -m`` attached to the terminal and return its exit status.

        Hooks and git's own output go straight to the user, so stdio is
        inherited. Only a failure to launch git is an error; a non-zero
        status is returned for the caller to forward.
        """
        try:
            result = subprocess.run(['git', 'commit', '-m', message], check=False)
        except OSError as e:
            raise GitError(f"Failed to run git commit: {e}")
        return result.returncode
