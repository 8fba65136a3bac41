#!/usr/bin/env python
import sys
from typing import List, Optional

from ClassHub import ClassHub
from config import Config
from hosting import GitHubHosting
from utils import command_parser, confirm, self_check
from vcs import Git


def main(argv: Optional[List[str]] = None) -> int:
    parser = command_parser(
        "ch get-assignment",
        "Clone the repositories of an assignment, or pull them if they were "
        "cloned before.")
    parser.add_argument('classroom', type=str,
                        help='GitHub organization of the class')
    parser.add_argument('prefix', type=str,
                        help='assignment name prefix, e.g. hw1 or 2425-hw1')
    parser.add_argument('dir', type=str, nargs='?', default='.',
                        help='directory holding the clones (default: .)')
    args = parser.parse_args(argv)

    token = self_check()
    conf = Config(verbosity=args.verbose)
    hosting = GitHubHosting.connect(token, args.verbose)

    failed = ClassHub.get_assignment(hosting, Git(args.verbose), conf,
                                     args.classroom, args.prefix, args.dir,
                                     confirm)
    if failed:
        print(f"ERROR: could not fetch {', '.join(failed)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
