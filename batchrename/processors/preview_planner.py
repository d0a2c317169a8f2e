"""Preview planning: turns files and a template into a validated rename plan."""

import logging

from batchrename.models.files import SourceFile
from batchrename.models.preview import PreviewEntry, PreviewPlan
from batchrename.models.template import RenameTemplate
from batchrename.processors.conflict_resolver import ConflictResolver
from batchrename.processors.name_generator import NameGenerator
from batchrename.processors.name_validator import NameValidator
from batchrename.processors.sort_ordering import order_files


logger = logging.getLogger(__name__)


def duplicate_reason(name: str) -> str:
    return f"Duplicate name: '{name}' already exists in batch"


class PreviewPlanner:
    """Builds rename previews with per-file conflict detection.

    Duplicates are resolved in favour of the file that comes first in sort order;
    later files with the same name (ignoring case) are flagged, never renamed
    automatically. `auto_resolve` is available for callers that prefer suffixing.
    """

    def __init__(
        self,
        validator: NameValidator | None = None,
        generator: NameGenerator | None = None,
        resolver: ConflictResolver | None = None,
    ) -> None:
        self.validator = validator or NameValidator()
        self.generator = generator or NameGenerator()
        self.resolver = resolver or ConflictResolver()

    def plan(
        self,
        files: list[SourceFile],
        template: RenameTemplate,
        overrides: dict[str, str] | None = None,
    ) -> PreviewPlan:
        """Generate a preview for a batch.

        Args:
            files: Files in selection order.
            template: Naming template.
            overrides: Optional manual names keyed by file id.

        Returns:
            PreviewPlan with one entry per file, in sort order.
        """
        template_error = template.validation_error()
        if template_error is not None:
            logger.debug("Template rejected: %s", template_error)
            overrides = overrides or {}
            candidates = [(file, overrides.get(file.id, file.name), file.id in overrides) for file in files]
            return PreviewPlan(
                entries=self._check_batch(candidates, template_error=template_error),
                template_error=template_error,
            )

        ordered = order_files(files, template.sort_strategy)
        candidates = [
            (file, self.generator.generate(file, template, ordinal), False) for ordinal, file in enumerate(ordered)
        ]
        for ix, (file, candidate, _) in enumerate(candidates):
            if overrides and file.id in overrides:
                candidates[ix] = (file, overrides[file.id], True)

        plan = PreviewPlan(entries=self._check_batch(candidates))
        logger.debug("Planned %d file(s): %s", len(plan), plan.summary.message)
        return plan

    def apply_overrides(self, plan: PreviewPlan, overrides: dict[str, str]) -> PreviewPlan:
        """Apply user-edited names and re-check the whole batch.

        Unedited entries keep their current candidate without regenerating it. When
        the plan stems from an invalid template, every entry keeps the template error
        and edited names are recorded but not accepted.

        Args:
            plan: Existing preview.
            overrides: New names keyed by file id.

        Returns:
            A new PreviewPlan; the input plan is not modified.
        """
        candidates: list[tuple[SourceFile, str, bool]] = []
        for entry in plan.entries:
            file = entry.source_file
            if file.id in overrides:
                candidates.append((file, overrides[file.id], True))
            else:
                candidates.append((file, entry.candidate_name, entry.overridden))

        return PreviewPlan(
            entries=self._check_batch(candidates, template_error=plan.template_error),
            template_error=plan.template_error,
        )

    def auto_resolve(self, plan: PreviewPlan) -> PreviewPlan:
        """Suffix duplicate names (`_1`, `_2`, ...) instead of flagging them.

        Names that are invalid for other reasons stay flagged.
        """
        if plan.template_error is not None:
            return plan

        names = [entry.candidate_name for entry in plan.entries]
        resolved = self.resolver.resolve_batch(names)
        overrides = {
            entry.source_file.id: new_name
            for entry, new_name in zip(plan.entries, resolved)
            if new_name != entry.candidate_name
        }
        if not overrides:
            return plan

        logger.debug("Auto-resolved %d duplicate name(s)", len(overrides))
        return self.apply_overrides(plan, overrides)

    def _check_batch(
        self,
        candidates: list[tuple[SourceFile, str, bool]],
        template_error: str | None = None,
    ) -> list[PreviewEntry]:
        """Validate candidates and flag duplicates against names accepted so far."""
        accepted: set[str] = set()
        entries: list[PreviewEntry] = []

        for file, candidate, overridden in candidates:
            if template_error is not None:
                entries.append(PreviewEntry.conflict(file, candidate, template_error, overridden))
                continue

            validation = self.validator.validate(candidate)
            if not validation.is_valid:
                entries.append(
                    PreviewEntry.conflict(file, candidate, validation.reason or "Invalid filename", overridden)
                )
                continue

            folded = candidate.casefold()
            if folded in accepted:
                entries.append(PreviewEntry.conflict(file, candidate, duplicate_reason(candidate), overridden))
                continue

            accepted.add(folded)
            entries.append(PreviewEntry.ok(file, candidate, overridden))

        return entries
