"""Sequential filename generation."""

from batchrename.models.files import SourceFile
from batchrename.models.template import RenameTemplate


class NameGenerator:
    """Generates `<prefix><zero-padded number>[.<extension>]` names."""

    def format_number(self, template: RenameTemplate, ordinal: int) -> str:
        """Zero-pad `start_number + ordinal` to the template width.

        Numbers wider than `digit_count` are kept whole rather than truncated.
        """
        if ordinal < 0:
            raise ValueError(f"Ordinal must be non-negative, got {ordinal}")
        return str(template.start_number + ordinal).zfill(template.digit_count)

    def generate(self, file: SourceFile, template: RenameTemplate, ordinal: int) -> str:
        """Generate the candidate name for a file.

        Args:
            file: File being renamed; only its extension is used.
            template: Naming template. Callers validate it beforehand.
            ordinal: Zero-based position of the file in the sorted batch.

        Returns:
            Candidate filename. The original extension keeps its casing.
        """
        base_name = f"{template.prefix}{self.format_number(template, ordinal)}"

        if template.preserve_extension and file.extension:
            return f"{base_name}.{file.extension}"
        return base_name
