import time
from typing import Dict, Iterator, Optional

from github import Auth, BadCredentialsException, Github, GithubException, \
    UnknownObjectException
from github.Organization import Organization

from errors import CannotAddUserToRepo, FetchFailed, PreconditionMissing, \
    RemoteLookupFailure


class GitHubHosting(object):
    """GitHub operations used by `ch`, on top of a PyGithub connection

    "Not found" answers are returned as `None`/`False`; every other GitHub
    error surfaces as `RemoteLookupFailure` so callers can tell a missing
    user from a broken connection.
    """

    retries: int = 3
    "Attempts at inviting a collaborator before giving up."

    retry_delay: float = 5
    "Seconds to wait between invitation attempts."

    def __init__(self, github: Github, verbose: bool = False):
        self.github = github
        self.verbose = verbose
        self._orgs: Dict[str, Organization] = {}

    @classmethod
    def connect(cls, token: str, verbose: bool = False) -> "GitHubHosting":
        """Opens an authenticated connection to GitHub

        The token is checked right away, so a revoked or expired token stops
        the command before it does any work.

        :param token: A GitHub token
        :param verbose: Enable verbose output
        """
        hosting = cls(Github(auth=Auth.Token(token)), verbose)
        try:
            login = hosting.github.get_user().login
        except BadCredentialsException:
            raise PreconditionMissing(
                "GitHub rejected the token. Run `gh auth login` or set "
                "GH_TOKEN.")
        except GithubException as e:
            if e.status == 401:
                raise PreconditionMissing(
                    f"Not authenticated with GitHub: {describe(e)}")
            raise RemoteLookupFailure(f"Cannot reach GitHub: {describe(e)}")
        if verbose:
            print(f"Authenticated with GitHub as {login}")
        return hosting

    def organization(self, owner: str) -> Organization:
        if owner not in self._orgs:
            try:
                self._orgs[owner] = self.github.get_organization(owner)
            except GithubException as e:
                raise RemoteLookupFailure(
                    f"Cannot access organization {owner}: {describe(e)}")
        return self._orgs[owner]

    def find_user(self, identifier: str) -> Optional[str]:
        """Resolves a student identifier to a GitHub login

        Identifiers containing `@` are searched for among public emails;
        anything else is looked up as a login.

        :param identifier: A GitHub login or an email address
        :return: The login, or None if there is no such user
        """
        if self.verbose:
            print(f"getting user for {identifier}")
        try:
            if "@" in identifier:
                for user in self.github.search_users(f"{identifier} in:email"):
                    return user.login
                return None
            return self.github.get_user(identifier).login
        except UnknownObjectException:
            return None
        except GithubException as e:
            raise RemoteLookupFailure(
                f"Cannot look up user {identifier}: {describe(e)}")

    def repo_exists(self, owner: str, name: str) -> bool:
        try:
            self.github.get_repo(f"{owner}/{name}")
            return True
        except UnknownObjectException:
            return False
        except GithubException as e:
            raise RemoteLookupFailure(
                f"Cannot look up repository {owner}/{name}: {describe(e)}")

    def create_repo(self, owner: str, name: str,
                    template: Optional[str] = None) -> None:
        """Creates a private repository, optionally from a template

        :param owner: Organization to create the repository in
        :param name: Name of the new repository
        :param template: `owner/name` of a template repository
        """
        org = self.organization(owner)
        try:
            if template:
                source = self.github.get_repo(template)
                org.create_repo_from_template(name, source, private=True)
            else:
                org.create_repo(name, private=True)
        except GithubException as e:
            raise RemoteLookupFailure(
                f"Cannot create repository {owner}/{name}: {describe(e)}")

    def add_collaborator(self, owner: str, name: str, login: str,
                         permission: str = "push") -> None:
        """Invites a user to a repository

        Sometimes GitHub returns a 404 for recently-created repositories, so
        the invitation is retried a few times before giving up.

        :param owner: Organization owning the repository
        :param name: Name of the repository
        :param login: GitHub login of the user
        :param permission: GitHub permission level; `push` is write access
        """
        attempts = self.retries
        while True:
            try:
                self.github.get_repo(f"{owner}/{name}").add_to_collaborators(
                    login, permission=permission)
                return
            except GithubException as e:
                attempts -= 1
                if attempts <= 0:
                    raise CannotAddUserToRepo(
                        f"Cannot add {login} to {owner}/{name}: "
                        f"{describe(e)}")
                print(f"Could not reach repository {name}. Sleeping...")
                time.sleep(self.retry_delay)

    def list_repos(self, owner: str) -> Iterator[str]:
        """Yields the names of the repositories of an organization

        :param owner: The organization
        :return: Repository names, in the order GitHub returns them
        """
        try:
            for repo in self.organization(owner).get_repos():
                yield repo.name
        except GithubException as e:
            raise RemoteLookupFailure(
                f"Cannot list repositories of {owner}: {describe(e)}")

    def get_file(self, repository: str, path: str, ref: str) -> bytes:
        """Downloads a file from a repository

        :param repository: `owner/name` of the repository
        :param path: Path of the file inside the repository
        :param ref: Branch, tag or commit
        :return: The decoded file content
        """
        try:
            contents = self.github.get_repo(repository).get_contents(
                path, ref=ref)
        except GithubException as e:
            raise FetchFailed(
                f"Cannot fetch {path} from {repository}@{ref}: {describe(e)}")
        if isinstance(contents, list):
            raise FetchFailed(f"{path} in {repository} is a directory.")
        return contents.decoded_content


def describe(e: GithubException) -> str:
    message = e.data.get("message") if isinstance(e.data, dict) else None
    return f"{e.status} {message or e.data}"
