"""Case-insensitive name collision detection and resolution."""

from collections import Counter

from batchrename.models.template import ILLEGAL_CHARACTERS
from batchrename.processors.name_validator import (
    MAX_FILENAME_LENGTH,
    is_control_character,
    is_reserved_name,
)


DEFAULT_REPLACEMENT = "_"
FALLBACK_NAME = "file"
RESERVED_SUFFIX = "_renamed"


def _fold(name: str) -> str:
    return name.casefold()


def _split_extension(name: str) -> tuple[str, str]:
    """Split into (base, extension) where extension keeps its leading period."""
    if "." not in name:
        return name, ""
    base, extension = name.rsplit(".", 1)
    return base, f".{extension}"


class ConflictResolver:
    """Batch helpers for duplicate detection, suffix-based resolution and sanitizing.

    All operations are pure; a new used-name set is built on every call.
    """

    def __init__(self, max_length: int = MAX_FILENAME_LENGTH) -> None:
        self.max_length = max_length

    def would_conflict(self, first: str, second: str) -> bool:
        return _fold(first) == _fold(second)

    def find_duplicates(self, names: list[str]) -> set[str]:
        """Return every name that appears more than once, ignoring case.

        Each duplicate is reported once, with the casing of its first occurrence.
        """
        counts = Counter(_fold(name) for name in names)
        first_seen: dict[str, str] = {}
        for name in names:
            first_seen.setdefault(_fold(name), name)
        return {first_seen[folded] for folded, count in counts.items() if count > 1}

    def safe_name(self, name: str, index: int) -> str:
        """Insert `_<index>` before the extension. Index 0 returns the name unchanged."""
        if index == 0:
            return name
        base, extension = _split_extension(name)
        return f"{base}_{index}{extension}"

    def resolve_batch(self, base_names: list[str]) -> list[str]:
        """Make every name in the batch unique, keeping the first occurrence untouched.

        Later colliding names get the smallest `_N` suffix not already used. The result
        has the same length as the input and is idempotent on already-unique input.
        """
        used: set[str] = set()
        resolved: list[str] = []

        for base_name in base_names:
            candidate = base_name
            index = 0
            while _fold(candidate) in used:
                index += 1
                candidate = self.safe_name(base_name, index)

            used.add(_fold(candidate))
            resolved.append(candidate)

        return resolved

    def sanitize(self, name: str, replacement: str = DEFAULT_REPLACEMENT) -> str:
        """Turn an arbitrary string into a legal filename.

        Args:
            name: Raw filename.
            replacement: Single character substituted for illegal and control characters.

        Returns:
            A filename that passes NameValidator.

        Raises:
            ValueError: If `replacement` is not a single legal character.
        """
        if len(replacement) != 1 or replacement in ILLEGAL_CHARACTERS or is_control_character(replacement):
            raise ValueError(f"Replacement must be a single legal character, got {replacement!r}")

        sanitized = "".join(
            replacement if char in ILLEGAL_CHARACTERS or is_control_character(char) else char for char in name
        )
        # Trailing characters and reserved names are checked on the truncated name
        sanitized = self._truncate(sanitized).rstrip(" .")

        if is_reserved_name(sanitized):
            base, extension = _split_extension(sanitized)
            sanitized = self._truncate(f"{base}{RESERVED_SUFFIX}{extension}").rstrip(" .")

        if not sanitized.strip() or is_reserved_name(sanitized):
            sanitized = FALLBACK_NAME

        return sanitized

    def _truncate(self, name: str) -> str:
        """Shorten a name to `max_length`, cutting the base and keeping the extension."""
        if len(name) <= self.max_length:
            return name

        base, extension = _split_extension(name)
        if len(extension) >= self.max_length:
            return name[: self.max_length]

        room = self.max_length - len(extension)
        base = base[:room].rstrip(" .") or FALLBACK_NAME[:room]
        return f"{base}{extension}"
