# tests/conftest.py
"""
Shared fixtures: in-memory stand-ins for GitHub and git
"""
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from config import Config
from errors import CannotAddUserToRepo, FetchFailed, GitCommandFailed, \
    RemoteLookupFailure


class FakeHosting:
    """Behaves like GitHubHosting, keeping repositories in a dict"""

    def __init__(self, users: Optional[Dict[str, str]] = None):
        self.users: Dict[str, str] = dict(users or {})
        self.repos: Dict[str, List[str]] = {}
        self.files: Dict[str, bytes] = {}
        self.broken_users = set()
        self.failing_invites = set()
        self.failing_creates = set()
        self.mutations: List[tuple] = []

    def add_repo(self, owner: str, name: str) -> None:
        self.repos[f"{owner}/{name}"] = []

    def find_user(self, identifier):
        if identifier in self.broken_users:
            raise RemoteLookupFailure(f"Cannot look up user {identifier}")
        return self.users.get(identifier)

    def repo_exists(self, owner, name):
        return f"{owner}/{name}" in self.repos

    def create_repo(self, owner, name, template=None):
        if name in self.failing_creates:
            raise RemoteLookupFailure(f"Cannot create repository {name}")
        self.mutations.append(("create", owner, name, template))
        self.repos[f"{owner}/{name}"] = []

    def add_collaborator(self, owner, name, login, permission="push"):
        if login in self.failing_invites:
            raise CannotAddUserToRepo(f"Cannot add {login} to {name}")
        self.mutations.append(("invite", owner, name, login, permission))
        self.repos[f"{owner}/{name}"].append(login)

    def list_repos(self, owner):
        for full_name in self.repos:
            repo_owner, name = full_name.split("/", 1)
            if repo_owner == owner:
                yield name

    def get_file(self, repository, path, ref):
        if path not in self.files:
            raise FetchFailed(f"Cannot fetch {path} from {repository}@{ref}")
        return self.files[path]


class FakeGit:
    def __init__(self):
        self.calls: List[tuple] = []
        self.failing = set()

    def clone(self, url, path):
        self.calls.append(("clone", url, path))
        if Path(path).name in self.failing:
            raise GitCommandFailed(f"git clone {url} exited with status 128")
        Path(path).mkdir(parents=True)

    def pull(self, path):
        self.calls.append(("pull", path))
        if Path(path).name in self.failing:
            raise GitCommandFailed(f"git pull in {path} exited with status 1")


@pytest.fixture
def hosting() -> FakeHosting:
    return FakeHosting({
        "alice@x.com": "alice",
        "bob@x.com": "bob",
        "carol": "carol",
        "dave": "dave",
    })


@pytest.fixture
def git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def settings(tmp_path) -> Config:
    """Default settings; the config file does not exist"""
    return Config(str(tmp_path / "missing.json"))


@pytest.fixture
def write_roster(tmp_path) -> Callable[[str], str]:
    """Writes roster text to a file and returns its path"""
    def write(text: str, name: str = "roster.csv") -> str:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return str(path)
    return write


@pytest.fixture
def yes() -> Callable[[str], bool]:
    return lambda prompt: True


@pytest.fixture
def no() -> Callable[[str], bool]:
    return lambda prompt: False
