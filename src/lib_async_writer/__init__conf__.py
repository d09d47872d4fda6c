"""Static distribution metadata surfaced by the CLI and the package root.

Keep these values in sync with ``pyproject.toml``.
"""

from __future__ import annotations

name = "lib_async_writer"
title = "Asynchronous batching text writer with a background consumer thread"
version = "0.1.0"
homepage = "https://github.com/lib-async-writer/lib_async_writer"
author = "lib_async_writer maintainers"
author_email = "maintainers@lib-async-writer.invalid"
shell_command = "lib_async_writer"

_FIELDS = (
    ("name", name),
    ("title", title),
    ("version", version),
    ("homepage", homepage),
    ("author", author),
    ("author_email", author_email),
    ("shell_command", shell_command),
)


def summary_info() -> str:
    """Return the metadata banner printed by ``lib_async_writer info``.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_async_writer:'
    """

    pad = max(len(label) for label, _ in _FIELDS)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in _FIELDS)
    return "\n".join(lines) + "\n"
