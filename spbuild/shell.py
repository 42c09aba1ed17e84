"""Running shell commands."""

from __future__ import annotations

import subprocess


def run_cmd(cmd: str, keep_output: bool = False) -> tuple[int, str | None]:
    """Run ``cmd`` through the shell.

    Returns the exit status and, when ``keep_output`` is set, the standard
    output of the command. A command killed by a signal yields -2.
    """
    completed = subprocess.run(
        cmd,
        shell=True,
        stdout=subprocess.PIPE if keep_output else subprocess.DEVNULL,
    )
    output = None
    if keep_output:
        output = completed.stdout.decode("utf-8", errors="replace")
    status = completed.returncode
    if status < 0:
        status = -2
    return status, output