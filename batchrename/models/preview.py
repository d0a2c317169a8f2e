"""Preview (rename plan) data models."""

from enum import Enum

from pydantic import BaseModel, Field

from batchrename.models.files import SourceFile


class ValidationResult(BaseModel):
    """Verdict of the filename validator."""

    is_valid: bool
    reason: str | None = None

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, reason: str) -> "ValidationResult":
        return cls(is_valid=False, reason=reason)


class PreviewOutcome(str, Enum):
    OK = "ok"
    CONFLICT = "conflict"


class PreviewEntry(BaseModel):
    """Planned outcome for a single file, prior to any rename."""

    source_file: SourceFile
    candidate_name: str = Field(description="Proposed new filename")
    outcome: PreviewOutcome = Field(default=PreviewOutcome.OK)
    conflict_reason: str | None = Field(default=None, description="Why the entry cannot be renamed")
    overridden: bool = Field(default=False, description="Candidate name was edited by the user")

    def __str__(self) -> str:
        return f"PreviewEntry('{self.source_file.name}' -> '{self.candidate_name}', outcome={self.outcome.value})"

    @classmethod
    def ok(cls, source_file: SourceFile, candidate_name: str, overridden: bool = False) -> "PreviewEntry":
        return cls(source_file=source_file, candidate_name=candidate_name, overridden=overridden)

    @classmethod
    def conflict(
        cls, source_file: SourceFile, candidate_name: str, reason: str, overridden: bool = False
    ) -> "PreviewEntry":
        return cls(
            source_file=source_file,
            candidate_name=candidate_name,
            outcome=PreviewOutcome.CONFLICT,
            conflict_reason=reason,
            overridden=overridden,
        )

    @property
    def has_conflict(self) -> bool:
        return self.outcome is PreviewOutcome.CONFLICT

    @property
    def is_changed(self) -> bool:
        return self.source_file.name != self.candidate_name

    @property
    def can_rename(self) -> bool:
        """Only conflict-free entries that actually change the name are executed."""
        return not self.has_conflict and self.is_changed

    @property
    def description(self) -> str:
        if self.has_conflict:
            return f"Cannot rename: {self.conflict_reason}"
        if not self.is_changed:
            return "No change needed"
        return f"{self.source_file.name} → {self.candidate_name}"


class PreviewSummary(BaseModel):
    """Aggregate counts over a list of preview entries."""

    total_files: int = 0
    valid_count: int = 0
    conflict_count: int = 0
    unchanged_count: int = 0
    rename_count: int = 0

    @classmethod
    def from_entries(cls, entries: list[PreviewEntry]) -> "PreviewSummary":
        return cls(
            total_files=len(entries),
            valid_count=sum(1 for e in entries if not e.has_conflict),
            conflict_count=sum(1 for e in entries if e.has_conflict),
            unchanged_count=sum(1 for e in entries if not e.has_conflict and not e.is_changed),
            rename_count=sum(1 for e in entries if e.can_rename),
        )

    @property
    def can_proceed(self) -> bool:
        return self.conflict_count == 0 and self.valid_count > 0

    @property
    def message(self) -> str:
        if self.conflict_count > 0:
            return f"{self.conflict_count} file(s) have conflicts"
        if self.rename_count == 0:
            return "No files will be renamed"
        return f"{self.rename_count} file(s) ready to rename"


class PreviewPlan(BaseModel):
    """Full preview for a batch: one entry per file, in sort order."""

    entries: list[PreviewEntry] = Field(default_factory=list)
    template_error: str | None = Field(
        default=None, description="Template-level error shared by every entry, if the template was invalid"
    )

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def summary(self) -> PreviewSummary:
        # Recomputed on access so that edits to the entry list are always reflected
        return PreviewSummary.from_entries(self.entries)

    @property
    def executable_entries(self) -> list[PreviewEntry]:
        return [entry for entry in self.entries if entry.can_rename]
