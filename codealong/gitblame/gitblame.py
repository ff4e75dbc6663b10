# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of Codealong, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess

from pygit2 import Oid, Repository

from codealong.appconsts import APP_GIT_COMMAND
from codealong.gitblame.blameline import parseBlameLine
from codealong.gitblame.errors import BlameError, ProcessSpawnError, StreamCaptureError

_logger = logging.getLogger(__name__)


def formatExitCode(code: int) -> str:
    # Popen reports death by signal N as -N
    if code < 0:
        try:
            s = signal.Signals(-code)
            return f"{code} ({s.name})"
        except ValueError:
            pass

    return f"{code}"


class GitBlame:
    """
    Find out which commit last touched a given line of a file, without
    blaming the entire file upfront.

    libgit2 has an extremely slow blame implementation
    (https://github.com/libgit2/libgit2/issues/3027), so we defer to vanilla
    git and run "git blame --incremental". Its output is only read as far as
    needed to answer each query. Resolved lines are cached for the lifetime
    of the session.

    Always close the session (or use it as a context manager) so that the
    git process gets reaped:

        with GitBlame(repo, parentId, "README.md", 14) as blame:
            commitId = blame.getLine(1)

    A session isn't thread-safe. Don't share it between threads.
    """

    _commandStem = shlex.split(APP_GIT_COMMAND, posix=True)

    @classmethod
    def setGitPath(cls, gitPath: str):
        # Treat command as POSIX even on Windows!
        cls._commandStem = shlex.split(gitPath, posix=True)

    @classmethod
    def buildCommand(cls, parent: Oid, oldPath: str | os.PathLike, churnCutoff: int) -> list[str]:
        return [
            *cls._commandStem,
            "blame",
            str(parent),
            "-s",
            "-l",
            "-p",
            "--incremental",
            f"--since={churnCutoff}.days",
            "--",
            os.fspath(oldPath),
        ]

    def __init__(
            self,
            repo: Repository,
            parent: Oid,
            oldPath: str | os.PathLike,
            churnCutoff: int
    ):
        self._process: subprocess.Popen | None = None
        self._lineMap: dict[int, Oid] = {}
        self._closed = False
        self._exhausted = False
        self._errorText = ""

        if isinstance(churnCutoff, bool) or not isinstance(churnCutoff, int) or churnCutoff < 0:
            raise ValueError(f"churn cutoff must be a non-negative number of days: {churnCutoff!r}")

        tokens = self.buildCommand(parent, oldPath, churnCutoff)
        directory = repo.workdir or repo.path  # bare repos have no workdir

        _logger.debug(f"Spawning: {shlex.join(tokens)} (in {directory})")

        try:
            self._process = subprocess.Popen(
                tokens,
                cwd=directory,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE)
        except OSError as exc:
            raise ProcessSpawnError(f"Could not launch {tokens[0]}: {exc}") from exc

        if self._process.stdout is None:
            self.close()
            raise StreamCaptureError("Could not capture standard output.")

        if self._process.stderr is None:
            self.close()
            raise StreamCaptureError("Could not capture standard error.")

    def __enter__(self) -> GitBlame:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __del__(self):
        if getattr(self, "_process", None) is not None and not self._closed:
            _logger.warning(f"GitBlame wasn't closed, killing git process {self._process.pid}")
            self.close()

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def exhausted(self) -> bool:
        """ True once git's output has been read to the end. """
        return self._exhausted

    @property
    def numResolvedLines(self) -> int:
        return len(self._lineMap)

    def getLine(self, lineNumber: int) -> Oid | None:
        """
        Return the id of the commit that last touched the given original
        line number, or None if git's output has no entry for that line.

        Raise BlameError if git reports an error before the line is found.
        """
        if lineNumber < 1:
            raise ValueError(f"line numbers start at 1: {lineNumber}")

        try:
            return self._lineMap[lineNumber]
        except KeyError:
            return self._scanForLine(lineNumber)

    def _scanForLine(self, lineNumber: int) -> Oid | None:
        if self._closed:
            raise BlameError("blame session is closed")

        if not self._exhausted:
            for rawLine in self._process.stdout:
                blameLine = parseBlameLine(rawLine.decode("utf-8", errors="replace"))
                if blameLine is None:
                    continue

                # First writer wins. Original line numbers from different
                # commits may collide; the earliest group in the output sticks.
                key = blameLine.originalLineNumber
                self._lineMap.setdefault(key, blameLine.commitId)

                if key == lineNumber:
                    return self._lineMap[key]

            self._drainAfterEndOfOutput()

        if self._errorText:
            raise BlameError(self._errorText)

        return None

    def _drainAfterEndOfOutput(self):
        # Git may have written an error to stderr without producing any output.
        # The exit code catches failures that left stderr blank.
        errorText = self._process.stderr.read().decode("utf-8", errors="replace")
        exitCode = self._process.wait()

        _logger.debug(f"git blame output exhausted after {len(self._lineMap)} lines, "
                      f"exit code {formatExitCode(exitCode)}")

        if errorText:
            self._errorText = errorText
        elif exitCode != 0:
            self._errorText = f"git blame exited with code {formatExitCode(exitCode)}"

        self._exhausted = True

    def close(self):
        """
        Kill the git process and wait for it to be reaped, even if its
        output hasn't been read to the end. Otherwise, the process would
        linger as a zombie. Errors while killing or reaping are not caught.
        """
        if self._closed:
            return

        process = self._process
        if process is not None:
            process.kill()
            exitCode = process.wait()
            for stream in (process.stdout, process.stderr):
                if stream is not None:
                    stream.close()
            _logger.debug(f"git process {process.pid} reaped, exit code {formatExitCode(exitCode)}")

        self._closed = True
