"""Batch execution progress data models."""

from enum import Enum

from pydantic import BaseModel, Field

from batchrename.models.files import SourceFile


class RenameStatus(str, Enum):
    """Lifecycle of one file during a run."""

    PENDING = "pending"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self in (RenameStatus.SUCCEEDED, RenameStatus.FAILED, RenameStatus.SKIPPED)


class RunState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RenameProgress(BaseModel):
    """A single progress event emitted while a batch is executing."""

    index: int = Field(description="Position of the file within the run (0-based)")
    total: int = Field(description="Number of files in the run")
    file: SourceFile
    target_name: str = Field(default="", description="Name the file is being renamed to")
    status: RenameStatus
    message: str = Field(default="", description="Reason for a skip or failure")

    def __str__(self) -> str:
        return f"RenameProgress({self.position}, '{self.file.name}', status={self.status.value})"

    @property
    def percentage(self) -> int:
        if self.total <= 0:
            return 0
        return (self.index + 1) * 100 // self.total

    @property
    def position(self) -> str:
        return f"{self.index + 1}/{self.total}"

    @property
    def is_last_file(self) -> bool:
        return self.index == self.total - 1


class RenameResult(BaseModel):
    """Outcome reported by a rename executor for one rename call."""

    success: bool
    new_identity: str | None = Field(default=None, description="Identifier of the renamed file")
    error: str | None = Field(default=None, description="Failure reason")

    @classmethod
    def succeeded(cls, new_identity: str) -> "RenameResult":
        return cls(success=True, new_identity=new_identity)

    @classmethod
    def failed(cls, reason: str) -> "RenameResult":
        return cls(success=False, error=reason)

    @property
    def status_message(self) -> str:
        if self.success:
            return "Renamed successfully"
        return f"Failed: {self.error or 'Unknown error'}"


class BatchRun(BaseModel):
    """Run-scoped counters for one execution. A new run starts from a fresh instance."""

    total: int = 0
    succeeded_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0
    state: RunState = RunState.NOT_STARTED
    outcomes: dict[str, RenameStatus] = Field(default_factory=dict, description="Status per file id")
    failed_files: list[SourceFile] = Field(default_factory=list)
    error: str | None = Field(default=None, description="Reason the run was rejected up front")

    @property
    def cancelled(self) -> bool:
        return self.state is RunState.CANCELLED

    @property
    def completed(self) -> bool:
        return self.state is RunState.COMPLETED

    @property
    def processed_count(self) -> int:
        return self.succeeded_count + self.failed_count + self.skipped_count

    def record(self, file: SourceFile, status: RenameStatus) -> None:
        """Store a status for a file, counting it if it is terminal."""
        self.outcomes[file.id] = status
        if status is RenameStatus.SUCCEEDED:
            self.succeeded_count += 1
        elif status is RenameStatus.FAILED:
            self.failed_count += 1
            self.failed_files.append(file)
        elif status is RenameStatus.SKIPPED:
            self.skipped_count += 1

    def summary(self) -> str:
        """Return a human-readable summary of the run."""
        lines = [
            "Rename Summary:",
            f"  State: {self.state.value}",
            f"  Total: {self.total}",
            f"  Succeeded: {self.succeeded_count}",
            f"  Failed: {self.failed_count}",
            f"  Skipped: {self.skipped_count}",
        ]
        if self.error:
            lines.append(f"  Error: {self.error}")
        return "\n".join(lines)
