"""Local filesystem implementations of the file source and rename executor."""

import logging
import mimetypes
import os
from datetime import datetime, timezone
from pathlib import Path

from batchrename.models.files import SelectionCriteria, SourceFile
from batchrename.models.progress import RenameResult
from batchrename.processors.capabilities import FileSource, RenameExecutor


logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or DEFAULT_MIME_TYPE


def source_file_from_path(path: Path) -> SourceFile:
    """Build a SourceFile from a path on disk. The file id is its absolute path."""
    stat = path.stat()
    return SourceFile(
        id=str(path.absolute()),
        name=path.name,
        path=str(path.absolute()),
        size_bytes=stat.st_size,
        mime_type=guess_mime_type(path),
        last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
    )


class LocalFileSource(FileSource):
    """Lists regular files in a single directory (non-recursive)."""

    def list_files(self, criteria: SelectionCriteria) -> list[SourceFile]:
        """List files in `criteria.directory` that satisfy the criteria.

        Files are returned sorted by name so that "original order" is deterministic.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.
        """
        directory = Path(criteria.directory)
        if not directory.exists():
            raise FileNotFoundError(f"Directory not found: {directory}")
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        files: list[SourceFile] = []
        for path in sorted(directory.iterdir(), key=lambda p: p.name):
            if not path.is_file():
                continue
            if path.name.startswith(".") and not criteria.include_hidden:
                continue

            file = source_file_from_path(path)
            if criteria.matches(file):
                files.append(file)

        logger.debug("Selected %d file(s) from %s", len(files), directory)
        return files


class LocalRenameExecutor(RenameExecutor):
    """Renames files in place on the local filesystem."""

    def _target_path(self, file: SourceFile, proposed_name: str) -> Path:
        return Path(file.path).parent / proposed_name

    def has_conflict(self, file: SourceFile, proposed_name: str) -> bool:
        """A conflict exists when a different file already occupies the target path.

        A case-only rename of the same file on a case-insensitive filesystem resolves
        to the file itself and is not a conflict.
        """
        source = Path(file.path)
        target = self._target_path(file, proposed_name)
        if not target.exists():
            return False
        try:
            return not os.path.samefile(source, target)
        except OSError:
            return True

    def rename(self, file: SourceFile, proposed_name: str) -> RenameResult:
        source = Path(file.path)
        target = self._target_path(file, proposed_name)

        if not source.exists():
            return RenameResult.failed(f"Source file not found: {source}")
        if self.has_conflict(file, proposed_name):
            return RenameResult.failed(f"Target file already exists: {target}")

        try:
            source.rename(target)
        except PermissionError as e:
            return RenameResult.failed(f"Permission denied: cannot rename {source.name} ({e})")
        except OSError as e:
            return RenameResult.failed(f"Failed to rename {source.name}: {e}")

        logger.debug("Renamed %s -> %s", source, target)
        return RenameResult.succeeded(str(target.absolute()))
