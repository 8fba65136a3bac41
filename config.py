import json
import os
import os.path
from typing import Optional

from errors import ConfigError

DEFAULT_CONFIG_PATH = "~/.config/class-hub/config.json"


class Config(object):
    """
    A data-only class storing the settings of the `ch` tool

    Settings are read from an optional JSON file. The path is taken from the
    `CH_CONFIG` environment variable, falling back to
    `~/.config/class-hub/config.json`. Every key is optional, except that
    `ch update` needs `update_repository`:

    ```json
    {
     "hostname" : "github.com",
     "clone_protocol" : "https",
     "update_repository" : "cs-staff/class-hub",
     "update_branch" : "main",
     "completion_path" : "~/.local/share/bash-completion/completions/ch"
    }
    ```

    The GitHub token is never stored here; see `utils.find_token`.
    """

    def __init__(self, json_conf_file: Optional[str] = None,
                 verbosity: bool = False):

        if json_conf_file is None:
            json_conf_file = os.environ.get("CH_CONFIG", DEFAULT_CONFIG_PATH)
        json_conf_file = os.path.expanduser(json_conf_file)

        self.path: str = json_conf_file
        "The settings file, whether or not it exists."

        conf = {}
        if os.path.exists(json_conf_file):
            try:
                with open(json_conf_file, 'r') as f:
                    conf = json.loads(f.read())
            except ValueError as e:
                raise ConfigError(
                    f"Cannot parse config file {json_conf_file}: {e}")
            if not isinstance(conf, dict):
                raise ConfigError(
                    f"Config file {json_conf_file} must hold a JSON object.")

        self.verbose: bool = verbosity
        "Flag to enable verbose output"

        self.hostname: str = conf.get("hostname", "github.com")
        """
        Host used in clone URLs. With the `ssh` protocol this may be the name
        of an SSH `config` host, which allows a separate GitHub identity for
        course management.
        """

        self.clone_protocol: str = conf.get("clone_protocol", "https")
        "Either `https` or `ssh`."
        if self.clone_protocol not in ("https", "ssh"):
            raise ConfigError(
                f"Unknown clone_protocol '{self.clone_protocol}'; "
                f"use 'https' or 'ssh'.")

        self.update_repository: Optional[str] = conf.get(
            "update_repository")
        """`owner/name` of the repository `ch update` installs from. No
        default: `ch update` refuses to run until it is set."""

        self.update_branch: str = conf.get("update_branch", "main")

        self.completion_path: str = os.path.expanduser(
            conf.get("completion_path",
                     "~/.local/share/bash-completion/completions/ch"))
        "Installed bash completion script, regenerated by `ch update`."

    def clone_url(self, owner: str, repo: str) -> str:
        """Returns the Git URL of a given repo

        :param owner: The organization (classroom) owning the repo
        :param repo: Name of the repo
        :return: SSH or HTTPS URL of the repository
        """
        if self.clone_protocol == "ssh":
            return f"git@{self.hostname}:{owner}/{repo}.git"
        return f"https://{self.hostname}/{owner}/{repo}.git"
