# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of Codealong, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import os as _os

APP_VERSION = "0.3.0"
APP_SYSTEM_NAME = "codealong"
APP_DISPLAY_NAME = "Codealong"

APP_GIT_COMMAND = _os.environ.get("CODEALONG_GIT", "") or "git"
"""
Command used to launch vanilla git. May contain several tokens
(split with POSIX shell rules), e.g. "/usr/bin/env git".
Can be overridden with environment variable CODEALONG_GIT.
"""
