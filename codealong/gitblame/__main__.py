# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of Codealong, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations as _annotations

import logging as _logging
import sys as _sys

from pygit2 import Commit, GitError, Repository

from codealong.appconsts import APP_DISPLAY_NAME, APP_VERSION
from codealong.gitblame import GitBlame, GitBlameException

DEFAULT_CHURN_CUTOFF = 14


def blameCommandLineTool(argv: list[str] | None = None) -> int:
    from argparse import ArgumentParser

    parser = ArgumentParser(description=f"{APP_DISPLAY_NAME} lazy blame tool")
    parser.add_argument("repo", help="Repository path")
    parser.add_argument("path", help="File path, relative to the repository root, as of REV")
    parser.add_argument("lines", nargs="+", type=int, metavar="LINE", help="Original line numbers to look up")
    parser.add_argument("-r", "--rev", default="HEAD", help="Blame from this revision (default: HEAD)")
    parser.add_argument("-c", "--cutoff", type=int, default=DEFAULT_CHURN_CUTOFF, metavar="DAYS",
                        help=f"Only look at history within this many days (default: {DEFAULT_CHURN_CUTOFF})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    args = parser.parse_args(argv)

    _logging.basicConfig(level=_logging.DEBUG if args.verbose else _logging.WARNING)
    _logging.captureWarnings(True)

    try:
        repo = Repository(args.repo)
        parent = repo.revparse_single(args.rev).peel(Commit)
        with GitBlame(repo, parent.id, args.path, args.cutoff) as blame:
            for lineNumber in args.lines:
                commitId = blame.getLine(lineNumber)
                print(f"{lineNumber}\t{commitId if commitId is not None else '-'}")
    except (GitBlameException, GitError, KeyError, ValueError) as exc:
        print(f"error: {str(exc).strip()}", file=_sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    _sys.exit(blameCommandLineTool())
