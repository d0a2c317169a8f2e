"""Rename template data models."""

from enum import Enum

from pydantic import BaseModel, Field


# Characters rejected by Windows (and therefore by any portable filename)
ILLEGAL_CHARACTERS = frozenset('<>:"/\\|?*')

MIN_DIGIT_COUNT = 1
MAX_DIGIT_COUNT = 10

DEFAULT_START_NUMBER = 1
DEFAULT_DIGIT_COUNT = 3


class SortStrategy(str, Enum):
    """How files are ordered before numbering."""

    NATURAL = "natural"
    DATE_MODIFIED = "date_modified"
    SIZE = "size"
    ORIGINAL_ORDER = "original_order"

    @property
    def display_name(self) -> str:
        return {
            SortStrategy.NATURAL: "Natural (IMG_1, IMG_2, IMG_10)",
            SortStrategy.DATE_MODIFIED: "Date Modified",
            SortStrategy.SIZE: "File Size",
            SortStrategy.ORIGINAL_ORDER: "Original Selection Order",
        }[self]

    @property
    def description(self) -> str:
        return {
            SortStrategy.NATURAL: "Smart number sorting",
            SortStrategy.DATE_MODIFIED: "Newest to oldest",
            SortStrategy.SIZE: "Largest to smallest",
            SortStrategy.ORIGINAL_ORDER: "Keep selection order",
        }[self]

    @property
    def example(self) -> str:
        return {
            SortStrategy.NATURAL: "file1, file2, file10 (not file1, file10, file2)",
            SortStrategy.DATE_MODIFIED: "Most recent files first",
            SortStrategy.SIZE: "Biggest files first",
            SortStrategy.ORIGINAL_ORDER: "Same order as you selected them",
        }[self]


class RenameTemplate(BaseModel):
    """Naming template for a batch: prefix followed by a zero-padded sequence number.

    Invalid values are accepted at construction time so that the planner can report
    them against every file. Use `validation_error()` before generating names.
    """

    prefix: str = Field(description="Text placed before the sequence number")
    start_number: int = Field(default=DEFAULT_START_NUMBER, description="Number given to the first file")
    digit_count: int = Field(default=DEFAULT_DIGIT_COUNT, description="Minimum width of the sequence number")
    preserve_extension: bool = Field(default=True, description="Keep the original file extension")
    sort_strategy: SortStrategy = Field(default=SortStrategy.NATURAL, description="Ordering applied before numbering")

    def __str__(self) -> str:
        return (
            f"RenameTemplate(prefix='{self.prefix}', start={self.start_number}, digits={self.digit_count}, "
            f"sort={self.sort_strategy.value})"
        )

    def validation_error(self) -> str | None:
        """Return the first configuration problem, or None if the template is usable."""
        if not self.prefix.strip():
            return "Prefix cannot be empty"
        if any(char in ILLEGAL_CHARACTERS for char in self.prefix):
            return 'Prefix contains illegal characters (< > : " / \\ | ? *)'
        if any(ord(char) < 32 for char in self.prefix):
            return "Prefix contains control characters"
        if self.start_number < 0:
            return "Start number must be non-negative"
        if not MIN_DIGIT_COUNT <= self.digit_count <= MAX_DIGIT_COUNT:
            return f"Digit count must be between {MIN_DIGIT_COUNT} and {MAX_DIGIT_COUNT}"
        return None

    @property
    def is_valid(self) -> bool:
        return self.validation_error() is None
