#!/usr/bin/env python
import sys
from typing import Callable, Dict, List, Optional

import completion
import create_assignment
import get_assignment
import list_assignments
import update
from errors import ClassHubError, UserCancelled

USAGE = """\
usage: ch <command> [-v] [<args>]

Manage per-group GitHub repositories for classroom assignments.

commands:
  create-assignment <classroom> <assignment> <roster-file> [<template>]
                        create one repository per group and invite students
  list-assignments <classroom> [<prefix>]
                        list assignment repositories
  get-assignment <classroom> <prefix> [<dir>]
                        clone or pull every repository of an assignment
  update                install the latest version of ch
  autocomplete          print the bash completion script
  help                  show this message

Run `ch <command> -h` for help on a command.
"""

COMMANDS: Dict[str, Callable[[List[str]], int]] = {
    "create-assignment": create_assignment.main,
    "list-assignments": list_assignments.main,
    "get-assignment": get_assignment.main,
    "update": update.main,
    "autocomplete": completion.main,
}


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        print(USAGE, file=sys.stderr, end="")
        return 1

    command, args = argv[0], argv[1:]
    if command in ("-h", "--help", "help"):
        print(USAGE, end="")
        return 0
    if command not in COMMANDS:
        print(f"ERROR: unknown command '{command}'", file=sys.stderr)
        print(USAGE, file=sys.stderr, end="")
        return 1

    try:
        return COMMANDS[command](args)
    except UserCancelled as e:
        print(f"Cancelled. {e}")
        return 1
    except ClassHubError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
