"""Hosted repository detection, used to link documentation to files in the repository."""
from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from slugify import slugify

from ..logging_utils import get_logger
from .models import RepositoryInfo

logger = get_logger("config", "repository")

DEFAULT_TYPE = "git"
DEFAULT_BRANCH = "main"

_URL_PATTERNS = (
    re.compile(r"^(?:git\+)?(?:https?|ssh|git)://(?:[^@/]+@)?(?P<domain>[^/:]+)(?::\d+)?/(?P<path>[^#]+?)(?:#(?P<committish>.+))?$"),
    re.compile(r"^(?:[^@]+@)?(?P<domain>[^:/]+):(?P<path>[^#]+?)(?:#(?P<committish>.+))?$"),
)
_SHORTCUT_PATTERN = re.compile(r"^(?:(?P<host>github|gitlab|bitbucket):)?(?P<path>[\w.-]+/[\w.-]+)(?:#(?P<committish>.+))?$")

_HOSTS = {
    "github.com": (
        "https://github.com/{user}/{project}/blob/{branch}/{path}",
        "https://raw.githubusercontent.com/{user}/{project}/{branch}/{path}",
    ),
    "gitlab.com": (
        "https://gitlab.com/{user}/{project}/-/blob/{branch}/{path}",
        "https://gitlab.com/{user}/{project}/-/raw/{branch}/{path}",
    ),
    "bitbucket.org": (
        "https://bitbucket.org/{user}/{project}/src/{branch}/{path}",
        "https://bitbucket.org/{user}/{project}/raw/{branch}/{path}",
    ),
}
_SHORTCUTS = {"github": "github.com", "gitlab": "gitlab.com", "bitbucket": "bitbucket.org"}


@dataclass(frozen=True, slots=True)
class GitRepository:
    domain: str
    user: str
    project: str
    committish: str | None = None

    @classmethod
    def parse_url(cls, url: str) -> GitRepository | None:
        """Parse a clone, browse or shortcut (``github:user/project``) URL of a known host."""
        url = url.strip()
        shortcut = _SHORTCUT_PATTERN.match(url)
        if shortcut and "://" not in url:
            domain = _SHORTCUTS[shortcut.group("host") or "github"]
            path, committish = shortcut.group("path"), shortcut.group("committish")
        else:
            for pattern in _URL_PATTERNS:
                match = pattern.match(url)
                if match:
                    domain, path, committish = match.group("domain"), match.group("path"), match.group("committish")
                    break
            else:
                return None

        if domain not in _HOSTS:
            return None
        segments = [segment for segment in path.strip("/").split("/") if segment]
        if len(segments) < 2:
            return None
        project = segments[1][:-4] if segments[1].endswith(".git") else segments[1]
        return cls(domain=domain, user=segments[0], project=project, committish=committish)

    @property
    def branch(self) -> str:
        return self.committish or DEFAULT_BRANCH

    @property
    def homepage(self) -> str:
        return f"https://{self.domain}/{self.user}/{self.project}"

    @property
    def name(self) -> str:
        return self.project

    @property
    def type(self) -> str:
        return "git"

    @property
    def url(self) -> str:
        return f"https://{self.domain}/{self.user}/{self.project}.git"

    def file_url(self, file_path: str, fragment: str | None = None) -> str:
        browse, _ = _HOSTS[self.domain]
        url = browse.format(user=self.user, project=self.project, branch=self.branch, path=file_path.lstrip("/"))
        if fragment:
            url += f"#{slugify(fragment)}"
        return url

    def raw_file_url(self, file_path: str) -> str:
        _, raw = _HOSTS[self.domain]
        return raw.format(user=self.user, project=self.project, branch=self.branch, path=file_path.lstrip("/"))


def resolve_git_url(dir_path: Path) -> str | None:
    """Read the ``origin`` remote URL of the git checkout containing ``dir_path``."""
    try:
        result = subprocess.run(
            ["git", "config", "--get", "remote.origin.url"],
            check=True,
            capture_output=True,
            cwd=dir_path,
            text=True,
            timeout=10,
        )
    except FileNotFoundError:
        logger.debug("Repository unavailable as git could not be found")
        return None
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as exc:
        logger.debug("Unable to resolve git repository URL from directory %s: %s", dir_path, exc)
        return None
    return result.stdout.strip() or None


def get_repository(info: RepositoryInfo | None, dir_path: Path, package_repository: str | None = None) -> GitRepository | None:
    """Determine the repository from configuration, then package metadata, then the git checkout."""
    repo_type = (info.type if info else None) or DEFAULT_TYPE
    if repo_type.lower() != DEFAULT_TYPE:
        logger.debug("Repository unavailable as type is unsupported: %s", repo_type)
        return None

    url = (info.url if info else None) or package_repository or resolve_git_url(dir_path)
    if not url:
        logger.debug("Repository unavailable as no repository URL was found")
        return None

    repository = GitRepository.parse_url(url)
    if repository is None:
        logger.debug("Unable to parse git repository from URL: %s", url)
    else:
        logger.debug("Parsed git repository from URL: %s", url)
    return repository
