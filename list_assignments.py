#!/usr/bin/env python
from typing import List, Optional

from ClassHub import ClassHub
from hosting import GitHubHosting
from utils import command_parser, self_check


def main(argv: Optional[List[str]] = None) -> int:
    parser = command_parser(
        "ch list-assignments",
        "List the repositories of a classroom, optionally only those of one "
        "assignment.")
    parser.add_argument('classroom', type=str,
                        help='GitHub organization of the class')
    parser.add_argument('prefix', type=str, nargs='?',
                        help='assignment name prefix, e.g. hw1 or 2425-hw1')
    args = parser.parse_args(argv)

    token = self_check()
    hosting = GitHubHosting.connect(token, args.verbose)
    for name in ClassHub.list_assignments(hosting, args.classroom,
                                          args.prefix):
        print(name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
