#!/usr/bin/env python
from typing import List, Optional

from config import Config
from hosting import GitHubHosting
from updater import require_update_source, self_update
from utils import command_parser, self_check


def main(argv: Optional[List[str]] = None) -> int:
    parser = command_parser(
        "ch update", "Replace this installation of ch with the latest one.")
    args = parser.parse_args(argv)

    token = self_check()
    conf = Config(verbosity=args.verbose)
    require_update_source(conf)
    hosting = GitHubHosting.connect(token, args.verbose)

    changed = self_update(hosting, conf)
    if not changed:
        print("Already up to date.")
    else:
        print(f"Updated {len(changed)} files.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
