import os
import os.path
import subprocess
import sys
import tempfile
from typing import Dict, List, Optional

from config import Config
from errors import ConfigError
from hosting import GitHubHosting

# the files making up an installation of `ch`
MODULES = [
    "ch.py",
    "ClassHub.py",
    "completion.py",
    "config.py",
    "create_assignment.py",
    "errors.py",
    "get_assignment.py",
    "hosting.py",
    "list_assignments.py",
    "roster.py",
    "update.py",
    "updater.py",
    "utils.py",
    "vcs.py",
]


def install_dir() -> str:
    return os.path.dirname(os.path.abspath(__file__))


def replace_file(path: str, content: bytes) -> None:
    """Atomically replaces a file, keeping its permission bits

    The new content is staged in a temporary file next to `path` and renamed
    over it, so a reader never sees a half-written file.

    :param path: File to replace; created if missing
    :param content: The new content
    """
    directory = os.path.dirname(os.path.abspath(path))
    mode = os.stat(path).st_mode & 0o7777 if os.path.exists(path) else 0o644
    fd, staged = tempfile.mkstemp(dir=directory, prefix=".ch-update-")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.chmod(staged, mode)
        os.replace(staged, path)
    except BaseException:
        os.unlink(staged)
        raise


def require_update_source(config: Config) -> str:
    """Returns the repository to update from, or fails if none is set"""
    if not config.update_repository:
        raise ConfigError(
            f"No update_repository set in {config.path}; add the `owner/name` "
            f"of the repository that publishes ch.")
    return config.update_repository


def fetch_release(hosting: GitHubHosting, config: Config) -> Dict[str, bytes]:
    """Downloads every module of the latest published version

    :return: A dictionary mapping module file name to its content
    """
    release = {}
    for module in MODULES:
        if config.verbose:
            print(f"Fetching {module} from {config.update_repository}"
                  f"@{config.update_branch}")
        release[module] = hosting.get_file(config.update_repository, module,
                                           config.update_branch)
    return release


def changed_modules(release: Dict[str, bytes], directory: str) -> List[str]:
    changed = []
    for module, content in release.items():
        path = os.path.join(directory, module)
        if os.path.exists(path):
            with open(path, "rb") as f:
                if f.read() == content:
                    continue
        changed.append(module)
    return changed


def regenerate_completion(config: Config, directory: str) -> None:
    """Rewrites the installed completion script using the new `ch`"""
    if not os.path.exists(config.completion_path):
        return
    proc = subprocess.run(
        [sys.executable, os.path.join(directory, "ch.py"), "autocomplete"],
        stdout=subprocess.PIPE)
    if proc.returncode != 0:
        print(f"WARNING: could not regenerate {config.completion_path}",
              file=sys.stderr)
        return
    replace_file(config.completion_path, proc.stdout)
    print(f"Updated completion script {config.completion_path}")


def self_update(hosting: GitHubHosting, config: Config,
                directory: Optional[str] = None) -> List[str]:
    """Replaces the local installation with the latest published version

    Everything is downloaded before the first file is replaced, so a failed
    download leaves the installation untouched.

    :param hosting: GitHub client
    :param config: Settings naming the repository and branch to update from
    :param directory: Installation directory; defaults to this module's
    :return: The modules that were replaced; empty when already up to date
    """
    if directory is None:
        directory = install_dir()

    require_update_source(config)
    release = fetch_release(hosting, config)
    changed = changed_modules(release, directory)
    if not changed:
        return []

    for module in changed:
        print(f"Updating {module}")
        replace_file(os.path.join(directory, module), release[module])
    regenerate_completion(config, directory)
    return changed
