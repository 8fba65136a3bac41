#!/usr/bin/env python
from typing import List, Optional

from ClassHub import ClassHub
from hosting import GitHubHosting
from roster import Roster
from utils import command_parser, confirm, self_check


def main(argv: Optional[List[str]] = None) -> int:
    parser = command_parser(
        "ch create-assignment",
        "Create one private repository per student group and invite the "
        "students as collaborators.")
    parser.add_argument('classroom', type=str,
                        help='GitHub organization of the class')
    parser.add_argument('assignment', type=str,
                        help='assignment name, e.g. hw1')
    parser.add_argument('roster', type=str,
                        help='file with one "student, group" pair per line')
    parser.add_argument('template', type=str, nargs='?',
                        help='template repository (owner/name)')
    args = parser.parse_args(argv)

    token = self_check()
    roster = Roster(args.roster, args.verbose)
    if args.verbose:
        roster.pretty_print()

    hosting = GitHubHosting.connect(token, args.verbose)
    plan = ClassHub.plan_assignment(hosting, args.classroom, args.assignment,
                                    roster, args.template)
    plan.pretty_print()
    missing = plan.missing_students
    if missing:
        print(f"{len(missing)} students were not found on GitHub and will "
              f"not be invited.")

    result = ClassHub.create_assignment(hosting, plan, confirm)
    result.pretty_print()
    return 1 if result.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
