"""
Rendering of CODEOWNERS documents back to text.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import overload

import structlog

from file_codeowners.core.config import config
from file_codeowners.core.constants import OWNER_SEPARATOR, UNOWNED_MARKER
from file_codeowners.core.models import AliasLine, BlankLine, CommentLine, Line, RuleLine

logger = structlog.get_logger(__name__)


def render_line(line: Line) -> str:
    """Render one line in canonical form."""
    if isinstance(line, CommentLine):
        return f"#{line.text}"
    if isinstance(line, RuleLine):
        return f"{line.pattern}{OWNER_SEPARATOR}{' '.join(line.owners)}"
    if isinstance(line, AliasLine):
        return f"@{line.name}{OWNER_SEPARATOR}{' '.join(line.owners)}"
    if isinstance(line, BlankLine):
        return ""
    raise TypeError(f"Unknown line type: {type(line).__name__}")


@overload
def render_lines(lines: Iterable[Line], unowned: Iterable[str], charset: None = None) -> list[str]: ...


@overload
def render_lines(lines: Iterable[Line], unowned: Iterable[str], charset: str) -> list[bytes]: ...


def render_lines(
    lines: Iterable[Line], unowned: Iterable[str], charset: str | None = None
) -> list[str] | list[bytes]:
    """
    Render a document to its lines, followed by the unowned section.

    Args:
        lines: Document lines in order.
        unowned: Unowned paths; emitted sorted after the marker.
        charset: When given, every rendered line is encoded with it.

    Returns:
        Lines without trailing newlines.
    """
    rendered = [render_line(line) for line in lines]

    paths = sorted(unowned)
    if paths:
        if rendered and rendered[-1]:
            rendered.append("")
        rendered.append(UNOWNED_MARKER)
        rendered.extend(f"# {path}" for path in paths)

    if charset is not None:
        return [line.encode(charset) for line in rendered]
    return rendered


def write_atomic(path: str | os.PathLike[str], data: bytes) -> None:
    """
    Replace ``path`` with ``data`` so readers never see a partial file.

    The data goes to a temporary file in the destination directory which is
    then renamed over the target. The temporary file is removed on failure.

    Args:
        path: Destination file.
        data: Complete file contents.
    """
    target = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            if config.writer.fsync:
                os.fsync(tmp.fileno())
        if target.exists():
            os.chmod(tmp_name, target.stat().st_mode & 0o7777)
        else:
            os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    logger.debug("codeowners_written", path=str(target), bytes=len(data))
