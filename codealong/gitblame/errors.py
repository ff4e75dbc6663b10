# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of Codealong, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

class GitBlameException(Exception):
    pass


class ProcessSpawnError(GitBlameException):
    """ The git executable couldn't be launched. """


class StreamCaptureError(GitBlameException):
    """ Standard output or standard error couldn't be captured after launching git. """


class BlameError(GitBlameException):
    """ Git ran, but failed before producing the requested line. """

    def __init__(self, text: str):
        super().__init__(text)
        self.text = text
