from subprocess import call, Popen

from errors import GitCommandFailed


class Git(object):
    """Runs `git` for cloning and updating local copies of repositories"""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def clone(self, url: str, path: str) -> None:
        """Clones a repository into a new directory

        :param url: Clone URL of the repository
        :param path: Directory to clone into; must not exist
        """
        print(f"Cloning {url} to {path}.")
        cmd = ["git", "clone", url, path]
        if not self.verbose:
            cmd.insert(2, "--quiet")
        status = call(cmd)
        if status != 0:
            raise GitCommandFailed(
                f"git clone {url} exited with status {status}")

    def pull(self, path: str) -> None:
        """Pulls the latest changes into an existing clone

        :param path: Path to the local repository
        """
        print(f"Pulling in {path}.")
        cmd = ["git", "pull"] if self.verbose else ["git", "pull", "--quiet"]
        status = Popen(cmd, cwd=path).wait()  # note: blocking
        if status != 0:
            raise GitCommandFailed(
                f"git pull in {path} exited with status {status}")
