# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of Codealong, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
import logging
import os
import shlex
import sys
import tempfile
from collections.abc import Generator

import pygit2
import pytest

from codealong.appconsts import APP_SYSTEM_NAME
from codealong.gitblame import GitBlame


def setUpGitConfigSearchPaths(prefix=""):
    """
    Prevent unit tests from accessing the host system's git config files.
    This modifies libgit2 search paths and GIT_CONFIG environment variables
    for vanilla git.
    """
    ConfigLevel = pygit2.enums.ConfigLevel

    levels = [
        ConfigLevel.GLOBAL,
        ConfigLevel.XDG,
        ConfigLevel.SYSTEM,
        ConfigLevel.PROGRAMDATA,
    ]

    for level in levels:
        if prefix:
            path = f"{prefix}_{level.name}"
        else:
            path = ""
        pygit2.settings.search_path[level] = path

    def vanillaGitConfigPath(level):
        path = pygit2.settings.search_path[level]
        if path:
            path += "/.gitconfig"
        return path

    os.environ["GIT_CONFIG_SYSTEM"] = vanillaGitConfigPath(ConfigLevel.SYSTEM)
    os.environ["GIT_CONFIG_GLOBAL"] = vanillaGitConfigPath(ConfigLevel.GLOBAL)


@pytest.fixture(scope='session', autouse=True)
def maskHostGitConfig():
    setUpGitConfigSearchPaths("")


@pytest.fixture(scope='session', autouse=True)
def setUpLogging():
    rootLogger = logging.root
    rootLogger.setLevel(logging.DEBUG)

    yield

    # Chatty destructors may cause spam after pytest has wound down.
    # Work around https://github.com/pytest-dev/pytest/issues/5502
    for handler in rootLogger.handlers:
        rootLogger.removeHandler(handler)


@pytest.fixture
def tempDir() -> Generator[tempfile.TemporaryDirectory, None, None]:
    td = tempfile.TemporaryDirectory(prefix=f"{APP_SYSTEM_NAME}test-")
    yield td
    td.cleanup()


class FakeGit:
    """
    Makes GitBlame launch test/data/fakegit.py instead of vanilla git.
    """

    def __init__(self, directory: str, monkeypatch: pytest.MonkeyPatch):
        from .util import getTestDataPath

        self.directory = directory
        self.monkeypatch = monkeypatch
        self.logPath = os.path.join(directory, "fakegit-log.json")

        # monkeypatch restores the real command stem after the test
        monkeypatch.setattr(GitBlame, "_commandStem", GitBlame._commandStem)
        GitBlame.setGitPath(shlex.join([sys.executable, getTestDataPath("fakegit.py")]))

        monkeypatch.setenv("FAKEGIT_LOG", self.logPath)

    def replay(self, stdout: str = "", stderr: str = "", exitCode: int = 0, hang: float = 0, signalName: str = ""):
        stdoutPath = os.path.join(self.directory, "fakegit-stdout.txt")
        with open(stdoutPath, "wb") as f:
            f.write(stdout.encode("utf-8"))

        self.monkeypatch.setenv("FAKEGIT_STDOUT", stdoutPath)
        self.monkeypatch.setenv("FAKEGIT_STDERR", stderr)
        self.monkeypatch.setenv("FAKEGIT_EXIT", str(exitCode))
        self.monkeypatch.setenv("FAKEGIT_HANG", str(hang))
        self.monkeypatch.setenv("FAKEGIT_SIGNAL", signalName)

    def invocation(self) -> dict:
        with open(self.logPath, encoding="utf-8") as f:
            return json.load(f)


@pytest.fixture
def fakeGit(tempDir, monkeypatch) -> FakeGit:
    return FakeGit(tempDir.name, monkeypatch)


@pytest.fixture
def emptyRepo(tempDir) -> pygit2.Repository:
    """ Repository with no commits, for use with fakeGit. """
    return pygit2.init_repository(os.path.join(tempDir.name, "EmptyRepo"))
