"""
Preparation of the repository under test.

Clones the submission, installs its dependencies, drops its git metadata,
copies the environment template and starts it with Docker Compose.
"""

import shutil
from pathlib import Path
from urllib.parse import urlparse

from .commands import CommandRunner
from .config import (
    CLONE_COMMAND,
    DEFAULT_REPOSITORIES_DIR,
    ENV_FILENAME,
    GIT_DIRNAME,
    INSTALL_COMMAND,
    START_COMMAND,
)
from .models import GitHubInfo


def extract_github_info(github_url: str) -> GitHubInfo:
    """
    Parse the owner and repository name from a GitHub URL.

    Args:
        github_url: URL such as https://github.com/owner/repo.

    Returns:
        GitHubInfo with username and repository name.

    Raises:
        ValueError: If the URL does not point at exactly owner/repo.
    """
    parsed = urlparse(github_url.strip())
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid GitHub repository URL: {github_url}")

    path_parts = [part for part in parsed.path.split("/") if part]
    if len(path_parts) != 2:
        raise ValueError(f"Invalid GitHub repository URL: {github_url}")

    username, repository_name = path_parts
    if repository_name.endswith(".git"):
        repository_name = repository_name[: -len(".git")]

    return GitHubInfo(username=username, repository_name=repository_name)


class RepositoryManager:
    """
    Sets up submissions under a local repositories directory.

    Each submission lives in `<repositories_dir>/<username>`. An existing
    directory is reused as-is.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        repositories_dir: Path = DEFAULT_REPOSITORIES_DIR,
        env_template_path: Path | None = None,
        install_command: list[str] | str = INSTALL_COMMAND,
        start_command: list[str] | str = START_COMMAND,
        keep_git_dir: bool = False,
    ) -> None:
        """
        Initialize the repository manager.

        Args:
            runner: Command runner for git, npm and docker.
            repositories_dir: Where submissions are cloned.
            env_template_path: File copied to `.env` in every submission.
            install_command: Dependency installation command.
            start_command: Command that builds and starts the service.
            keep_git_dir: Keep `.git` after cloning.
        """
        self.runner = runner or CommandRunner()
        self.repositories_dir = repositories_dir
        self.env_template_path = env_template_path
        self.install_command = install_command
        self.start_command = start_command
        self.keep_git_dir = keep_git_dir

    def destination_for(self, info: GitHubInfo) -> Path:
        return self.repositories_dir / info.username

    def ensure_present(self, repository_url: str, info: GitHubInfo) -> Path:
        """
        Clone and set up the repository unless it is already there.

        Args:
            repository_url: URL to clone from.
            info: Parsed owner and name.

        Returns:
            Path to the local copy.

        Raises:
            InvocationFailure: If cloning or installing fails.
        """
        destination = self.destination_for(info)
        if destination.exists():
            print(f"Using existing copy at {destination}")
            return destination

        self.clone_and_setup(repository_url.strip(), destination)
        return destination

    def clone_and_setup(self, repository_url: str, destination: Path) -> None:
        """
        Clone a repository and prepare it to run.

        Args:
            repository_url: URL to clone from.
            destination: Target directory (must not exist yet).
        """
        destination.parent.mkdir(parents=True, exist_ok=True)

        print("Cloning repository...")
        self.runner.check([*CLONE_COMMAND, repository_url, str(destination)])

        print("Installing dependencies...")
        self.runner.check(self.install_command, cwd=destination)

        if not self.keep_git_dir:
            print(f"Removing {GIT_DIRNAME}")
            shutil.rmtree(destination / GIT_DIRNAME, ignore_errors=True)

        if self.env_template_path is not None:
            print(f"Copying {ENV_FILENAME} file...")
            if not self.env_template_path.exists():
                raise FileNotFoundError(f"Environment template not found: {self.env_template_path}")
            shutil.copy2(self.env_template_path, destination / ENV_FILENAME)

    def start_service(self, destination: Path) -> None:
        """
        Build and start the containers of a prepared repository.

        Args:
            destination: Local copy of the repository.

        Raises:
            InvocationFailure: If Docker Compose fails.
        """
        print("Starting Docker...")
        self.runner.check(self.start_command, cwd=destination)
