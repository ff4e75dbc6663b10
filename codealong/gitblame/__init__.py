# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of Codealong, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Lazily blame individual lines of a file by streaming the output of
"git blame --incremental".

This is much faster than libgit2's blame when only a handful of lines are
needed, because git's output is only read as far as required to resolve
each line.
"""

from codealong.gitblame.blameline import BlameLine, parseBlameLine
from codealong.gitblame.errors import (
    BlameError,
    GitBlameException,
    ProcessSpawnError,
    StreamCaptureError,
)
from codealong.gitblame.gitblame import GitBlame, formatExitCode
