"""Output writer for annotated Lua files and compiled stubs.

Lines are joined with ``\\n`` and written through a temporary file in the
target directory that is then moved over the destination, so a failed
write never leaves a half-written Lua file behind. Every outcome is
recorded in :class:`WriteMetadata`.

Example::

    writer = OutputWriter()
    result = writer.write_lines(Path("out/ISButton.lua"), report.lines)
    if not result.success:
        print(result.error)
"""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from zdoc.utils.logger import get_logger
from zdoc.utils.path_utils import ensure_directory


@dataclass
class WriteResult:
    """Result of a single write.

    Attributes:
        success: Whether the file was written or deliberately skipped.
        output_path: Path that was written, None when skipped or failed.
        overwritten: True if an existing file was replaced.
        skipped: True if nothing was written because there was no content.
        error: Error message of a failed write.
    """

    success: bool
    output_path: Path | None
    overwritten: bool = False
    skipped: bool = False
    error: str | None = None


@dataclass
class WriteMetadata:
    total_writes: int = 0
    successful_writes: int = 0
    failed_writes: int = 0
    skipped_writes: int = 0
    overwritten_writes: int = 0
    written_files: list[Path] = field(default_factory=list)


class OutputWriter:
    """Writes line sequences to disk atomically and keeps statistics."""

    def __init__(self) -> None:
        self._logger = get_logger("zdoc.core.output_writer")
        self._metadata = WriteMetadata()

    @property
    def metadata(self) -> WriteMetadata:
        return self._metadata

    def _write_atomic(self, output_path: Path, content: str) -> None:
        """Write ``content`` through a temp file renamed onto ``output_path``.

        Raises:
            OSError: On file-system errors, after removing the temp file.
        """
        ensure_directory(output_path.parent)
        temp_path: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                newline="\n",
                delete=False,
                dir=str(output_path.parent),
                suffix=output_path.suffix,
            ) as handle:
                temp_path = handle.name
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())

            shutil.move(temp_path, str(output_path))
            self._logger.debug(f"Atomic write: renamed {temp_path} -> {output_path}")
        except OSError:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def write_lines(self, output_path: Path, lines: Sequence[str]) -> WriteResult:
        """Write ``lines`` to ``output_path``, one per line.

        Empty content is never written; the call succeeds with
        ``skipped=True``.
        """
        self._metadata.total_writes += 1

        if not lines:
            self._metadata.skipped_writes += 1
            self._logger.debug(f"Nothing to write for {output_path.name}")
            return WriteResult(success=True, output_path=None, skipped=True)

        overwritten = output_path.exists()
        content = "\n".join(lines) + "\n"
        try:
            self._write_atomic(output_path, content)
        except OSError as exc:
            self._metadata.failed_writes += 1
            self._logger.error(f"Unable to write {output_path}: {exc}")
            return WriteResult(success=False, output_path=None, error=str(exc))

        self._metadata.successful_writes += 1
        self._metadata.written_files.append(output_path)
        if overwritten:
            self._metadata.overwritten_writes += 1

        return WriteResult(success=True, output_path=output_path, overwritten=overwritten)
