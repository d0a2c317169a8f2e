"""Capabilities the engine consumes from its calling environment."""

from abc import ABC, abstractmethod

from batchrename.models.files import SelectionCriteria, SourceFile
from batchrename.models.progress import RenameResult


class FileSource(ABC):
    """Supplies the candidate files for a batch.

    The engine never queries storage directly; selection is entirely up to the source.
    """

    @abstractmethod
    def list_files(self, criteria: SelectionCriteria) -> list[SourceFile]:
        """Return the files matching the selection criteria.

        Args:
            criteria: What to select.

        Returns:
            Files in the source's natural (selection) order.
        """
        pass


class RenameExecutor(ABC):
    """Performs the physical rename on behalf of the batch executor."""

    @abstractmethod
    def has_conflict(self, file: SourceFile, proposed_name: str) -> bool:
        """Check whether `proposed_name` is already taken next to `file`.

        Args:
            file: File that is about to be renamed.
            proposed_name: New filename, without directory.

        Returns:
            True if another file already uses the name.
        """
        pass

    @abstractmethod
    def rename(self, file: SourceFile, proposed_name: str) -> RenameResult:
        """Rename a file.

        Args:
            file: File to rename.
            proposed_name: New filename, without directory.

        Returns:
            RenameResult carrying the new identity or a failure reason.
        """
        pass
