"""Filename validation against portable filesystem rules."""

from batchrename.models.preview import ValidationResult
from batchrename.models.template import ILLEGAL_CHARACTERS


MAX_FILENAME_LENGTH = 255

# Windows device names, reserved regardless of extension or case
RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"] + [f"COM{i}" for i in range(1, 10)] + [f"LPT{i}" for i in range(1, 10)]
)


def is_control_character(char: str) -> bool:
    return ord(char) < 32


def strip_extension(name: str) -> str:
    """Return the name without its final extension (text after the last period)."""
    if "." not in name:
        return name
    return name.rsplit(".", 1)[0]


def is_reserved_name(name: str) -> bool:
    return strip_extension(name).upper() in RESERVED_NAMES


class NameValidator:
    """Checks whether a candidate filename is legal on the target filesystem.

    Rules are applied in a fixed order and the first failing rule determines the
    reason, so messages are deterministic for a given input.
    """

    def __init__(self, max_length: int = MAX_FILENAME_LENGTH) -> None:
        self.max_length = max_length

    def validate(self, name: str) -> ValidationResult:
        """Validate a filename.

        Args:
            name: Filename without any directory component.

        Returns:
            ValidationResult with the reason of the first failing rule, if any.
        """
        if not name.strip():
            return ValidationResult.invalid("Filename cannot be empty")

        if len(name) > self.max_length:
            return ValidationResult.invalid(f"Filename is too long (max {self.max_length} characters)")

        illegal = next((char for char in name if char in ILLEGAL_CHARACTERS), None)
        if illegal is not None:
            return ValidationResult.invalid(f"Filename contains illegal character: '{illegal}'")

        if any(is_control_character(char) for char in name):
            return ValidationResult.invalid("Filename contains control character")

        if name.endswith((" ", ".")):
            return ValidationResult.invalid("Filename cannot end with space or period")

        if is_reserved_name(name):
            return ValidationResult.invalid(f"'{strip_extension(name).upper()}' is a reserved filename")

        if all(char == "." for char in name):
            return ValidationResult.invalid("Filename cannot consist only of dots")

        return ValidationResult.valid()

    def is_valid(self, name: str) -> bool:
        return self.validate(name).is_valid
