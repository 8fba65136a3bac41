import argparse
import datetime
import os
import re
import shutil
import subprocess
import sys
from typing import Callable, NoReturn, Optional

from errors import PreconditionMissing, UsageError

YEAR_TOKEN = re.compile(r"^\d{4}-")


def academic_year(today: Optional[datetime.date] = None) -> str:
    """Returns the academic year token for a date, e.g. "2425".

    January through July belong to the academic year that started the
    previous August.

    :param today: The date to compute the token for; defaults to today
    :return: Two two-digit year suffixes, start year first
    """
    if today is None:
        today = datetime.date.today()
    if today.month <= 7:
        start = today.year - 1
    else:
        start = today.year
    return f"{start % 100:02d}{(start + 1) % 100:02d}"


def repo_name(year: str, assignment: str, group: int) -> str:
    return f"{year}-{assignment}-group{group:02d}"


def matches_prefix(name: str, prefix: Optional[str]) -> bool:
    """Checks whether a repository name belongs to an assignment prefix.

    The prefix is matched against the full name and against the name with its
    academic year token removed, so both "hw1" and "2425-hw1" select
    "2425-hw1-group01". The prefix has to end where a `-` separated part of
    the name ends: "hw1" does not select "2425-hw10-group01".
    """
    if not prefix:
        return True
    for candidate in (name, YEAR_TOKEN.sub("", name, count=1)):
        if candidate == prefix or candidate.startswith(prefix.rstrip("-") + "-"):
            return True
    return False


def confirm(prompt: str, ask: Optional[Callable[[str], str]] = None) -> bool:
    """Asks a yes/no question; only "y" or "yes" count as agreement."""
    if ask is None:
        ask = input
    try:
        answer = ask(f"{prompt} (y/N) ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def find_token() -> Optional[str]:
    """Looks up a GitHub token in the environment, then asks the gh CLI."""
    for var in ("GH_TOKEN", "GITHUB_TOKEN"):
        token = os.environ.get(var)
        if token:
            return token.strip()

    gh = shutil.which("gh")
    if gh is None:
        return None
    proc = subprocess.run([gh, "auth", "token"],
                          stdout=subprocess.PIPE,
                          stderr=subprocess.DEVNULL,
                          universal_newlines=True)
    token = proc.stdout.strip()
    if proc.returncode != 0 or not token:
        return None
    return token


def self_check() -> str:
    """
    Checks that `git` is in the PATH and that a GitHub token is available

    :return: The GitHub token
    """
    if shutil.which("git") is None:
        raise PreconditionMissing("Cannot find git.")

    token = find_token()
    if token is None:
        raise PreconditionMissing(
            "Not authenticated with GitHub. Run `gh auth login` or set "
            "GH_TOKEN.")
    return token


class CommandParser(argparse.ArgumentParser):
    """An argument parser that reports bad usage as `UsageError`"""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise UsageError(message)


def command_parser(prog: str, description: str) -> CommandParser:
    """The parser every `ch` command starts from

    ```python
    parser = command_parser("ch list-assignments", "...")
    parser.add_argument("classroom", type=str, help="GitHub organization")
    ```
    """
    parser = CommandParser(prog=prog, description=description)
    parser.add_argument('-v', '--verbose',
                        action='store_true',
                        help='enable verbose output')
    return parser
