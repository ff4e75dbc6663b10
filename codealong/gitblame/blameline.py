# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of Codealong, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import re

from pygit2 import Oid

# <40-hex commit> <original line> <final line> <number of lines in group>
# See https://git-scm.com/docs/git-blame#_the_porcelain_format
_blameLinePattern = re.compile(r"([0-9a-f]{40}) (\d+) (\d+) (\d+)\n", re.A)


@dataclasses.dataclass(frozen=True)
class BlameLine:
    commitId: Oid
    originalLineNumber: int
    finalLineNumber: int = 0
    numLines: int = 0


def parseBlameLine(rawLine: str) -> BlameLine | None:
    """
    Parse a line from the output of "git blame --incremental --porcelain".

    Only the group header lines carry a commit id and line numbers.
    Any other line (author, summary, filename, boundary, etc.) isn't
    an error; it just yields None.
    """
    match = _blameLinePattern.fullmatch(rawLine)
    if match is None:
        return None

    hexHash, original, final, count = match.groups()
    return BlameLine(Oid(hex=hexHash), int(original), int(final), int(count))
