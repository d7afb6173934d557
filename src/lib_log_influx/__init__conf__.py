"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

import sys
from typing import Callable

name = "lib_log_influx"
title = "Structured-log forwarder writing leveled log calls to InfluxDB"
version = "0.1.0"
shell_command = "lib_log_influx"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Emit the metadata banner through ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_influx:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    if writer is None:
        writer = sys.stdout.write
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")


__all__ = ["print_info", "name", "title", "version", "shell_command"]
