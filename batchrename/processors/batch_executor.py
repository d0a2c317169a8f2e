"""Sequential execution of an approved rename plan."""

import logging
import threading
from collections.abc import Iterator

from batchrename.models.preview import PreviewEntry
from batchrename.models.progress import BatchRun, RenameProgress, RenameStatus, RunState
from batchrename.models.template import RenameTemplate
from batchrename.processors.capabilities import RenameExecutor
from batchrename.processors.name_validator import NameValidator


logger = logging.getLogger(__name__)


class CancelToken:
    """Thread-safe cooperative cancellation flag."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()


class BatchExecutor:
    """Drives a preview plan through a rename executor, one file at a time.

    Files are processed strictly in plan order because later conflict checks depend on
    earlier renames having happened. A failure of one file never stops the batch.
    Cancellation is checked before each file; renames already done are not undone.
    """

    def __init__(self, renamer: RenameExecutor, validator: NameValidator | None = None) -> None:
        """Initialize the executor.

        Args:
            renamer: Capability that performs the physical renames.
            validator: Validator used to re-check names right before renaming.
        """
        self.renamer = renamer
        self.validator = validator or NameValidator()
        self.run = BatchRun()
        self._cancel_token = CancelToken()

    def cancel(self) -> None:
        """Request cancellation of the current run."""
        self._cancel_token.cancel()

    def execute(
        self,
        entries: list[PreviewEntry],
        template: RenameTemplate | None = None,
        cancel_token: CancelToken | None = None,
    ) -> Iterator[RenameProgress | BatchRun]:
        """Execute the eligible entries of a plan.

        Only conflict-free entries whose name actually changes are executed. Each file
        produces a `processing` event followed by exactly one terminal event. When the
        run ends, a snapshot of the `BatchRun` is yielded as the final summary.

        Args:
            entries: Preview entries in plan order.
            template: Template the plan was built from. If given and invalid, the run is
                rejected with a single `failed` event for the first file.
            cancel_token: External cancellation token, in addition to `cancel()`.

        Returns:
            Iterator of RenameProgress events, then one BatchRun summary. `run` and the
            cancellation token are reset when this method returns, so `cancel()` takes
            effect even before the first event is requested.
        """
        template_error = template.validation_error() if template is not None else None
        # An invalid template rejects the whole plan, not just its eligible entries
        eligible = list(entries) if template_error is not None else [e for e in entries if e.can_rename]

        # Reset eagerly so that cancel() and `run` refer to this run before iteration starts
        self.run = BatchRun(total=len(eligible))
        self._cancel_token = cancel_token or CancelToken()
        for entry in eligible:
            self.run.outcomes[entry.source_file.id] = RenameStatus.PENDING

        return self._stream(self.run, self._cancel_token, eligible, template_error)

    def _stream(
        self,
        run: BatchRun,
        cancel_token: CancelToken,
        eligible: list[PreviewEntry],
        template_error: str | None,
    ) -> Iterator[RenameProgress | BatchRun]:
        run.state = RunState.RUNNING
        try:
            if template_error is not None:
                logger.info("Rename rejected: %s", template_error)
                run.error = template_error
                if eligible:
                    first = eligible[0]
                    run.record(first.source_file, RenameStatus.FAILED)
                    yield self._progress(run, 0, first, RenameStatus.FAILED, template_error)
                run.state = RunState.COMPLETED
                yield run.model_copy(deep=True)
                return

            logger.info("Starting rename of %d file(s)", run.total)

            for index, entry in enumerate(eligible):
                if cancel_token.is_cancelled():
                    run.state = RunState.CANCELLED
                    logger.info("Rename cancelled after %d of %d file(s)", run.processed_count, run.total)
                    yield run.model_copy(deep=True)
                    return

                run.outcomes[entry.source_file.id] = RenameStatus.PROCESSING
                yield self._progress(run, index, entry, RenameStatus.PROCESSING)

                status, message = self._process(entry)
                run.record(entry.source_file, status)
                yield self._progress(run, index, entry, status, message)

            run.state = RunState.COMPLETED
            logger.info(
                "Rename finished: %d succeeded, %d failed, %d skipped",
                run.succeeded_count,
                run.failed_count,
                run.skipped_count,
            )
            yield run.model_copy(deep=True)
        finally:
            # The consumer stopped iterating before the run finished
            if run.state is RunState.RUNNING:
                run.state = RunState.CANCELLED

    def _process(self, entry: PreviewEntry) -> tuple[RenameStatus, str]:
        """Run the per-file step. Exceptions are converted into a `failed` status."""
        file = entry.source_file
        name = entry.candidate_name
        try:
            validation = self.validator.validate(name)
            if not validation.is_valid:
                return RenameStatus.SKIPPED, validation.reason or "Invalid filename"

            if self.renamer.has_conflict(file, name):
                return RenameStatus.SKIPPED, f"'{name}' already exists"

            result = self.renamer.rename(file, name)
            if result.success:
                return RenameStatus.SUCCEEDED, ""
            return RenameStatus.FAILED, result.error or "Unknown error"
        except Exception as e:
            logger.warning("Unexpected error renaming %s to %s", file.name, name, exc_info=True)
            return RenameStatus.FAILED, f"Unexpected error: {e}"

    def _progress(
        self, run: BatchRun, index: int, entry: PreviewEntry, status: RenameStatus, message: str = ""
    ) -> RenameProgress:
        return RenameProgress(
            index=index,
            total=run.total,
            file=entry.source_file,
            target_name=entry.candidate_name,
            status=status,
            message=message,
        )
