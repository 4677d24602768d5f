"""Run options and platform defaults."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any


def default_max_arg_length(platform: str | None = None) -> int:
    """Half of the platform's command-line length limit.

    macOS allows 262144 bytes, cmd.exe 8191 characters and Linux
    typically 131072 per argument string.
    """
    name = platform or sys.platform
    if name == "darwin":
        limit = 262144
    elif name == "win32":
        limit = 8191
    else:
        limit = 131072
    return limit // 2


@dataclass
class RunOptions:
    """Options for one `lint_recently` invocation."""

    concurrent: bool | int = True
    config: dict[str, Any] | None = None
    config_path: Path | None = None
    cwd: Path | None = None
    debug: bool = False
    max_arg_length: int | None = None
    quiet: bool = False
    relative: bool = False
    shell: bool | str = False
    verbose: bool = False

    def resolved_cwd(self) -> Path:
        return (self.cwd or Path.cwd()).resolve()
