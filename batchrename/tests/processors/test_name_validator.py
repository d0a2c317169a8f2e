"""Unit tests for NameValidator."""

import pytest

from batchrename.processors.name_validator import NameValidator


@pytest.fixture
def validator():
    return NameValidator()


class TestNameValidator:
    """Tests for NameValidator.validate."""

    @pytest.mark.parametrize(
        "name",
        [
            "photo001.jpg",
            "IMG_2024.PNG",
            "no_extension",
            ".hidden",
            "a" * 255,
            "CONSOLE.txt",
            "con.tar.gz",
            "résumé.pdf",
        ],
    )
    def test_accepts_valid_names(self, validator, name):
        """Test that legal names are accepted."""
        result = validator.validate(name)

        assert result.is_valid
        assert result.reason is None

    @pytest.mark.parametrize(
        "name,expected_reason",
        [
            ("", "cannot be empty"),
            ("   ", "cannot be empty"),
            ("a" * 256, "too long"),
            ("file<1>.txt", "illegal character: '<'"),
            ("a:b.txt", "illegal character: ':'"),
            ('quote".txt', "illegal character: '\"'"),
            ("dir/file.txt", "illegal character: '/'"),
            ("tab\there.txt", "control character"),
            ("file.txt ", "cannot end with space or period"),
            ("file.", "cannot end with space or period"),
            ("CON.txt", "reserved filename"),
            ("nul", "reserved filename"),
            ("Lpt9.log", "reserved filename"),
            ("com1", "reserved filename"),
        ],
    )
    def test_rejects_invalid_names(self, validator, name, expected_reason):
        """Test that each class of invalid name is rejected with its reason."""
        result = validator.validate(name)

        assert not result.is_valid
        assert expected_reason in result.reason

    def test_first_failing_rule_wins(self, validator):
        """Test that rules are checked in order: length before illegal characters."""
        result = validator.validate("<" * 300)

        assert "too long" in result.reason

    def test_illegal_character_reported_before_control_character(self, validator):
        """Test that the illegal character rule precedes the control character rule."""
        result = validator.validate("a\x01b?.txt")

        assert "illegal character: '?'" in result.reason

    def test_only_dots_is_rejected(self, validator):
        """Test that a name made of dots is rejected."""
        result = validator.validate("...")

        assert not result.is_valid

    def test_reserved_name_reason_is_uppercase(self, validator):
        """Test that the reserved name is reported case-folded."""
        result = validator.validate("aux.md")

        assert result.reason == "'AUX' is a reserved filename"

    def test_custom_max_length(self):
        """Test that the maximum length can be configured."""
        validator = NameValidator(max_length=10)

        assert validator.is_valid("abcdefghij")
        assert not validator.is_valid("abcdefghijk")

    def test_is_valid_shortcut(self, validator):
        """Test the boolean shortcut."""
        assert validator.is_valid("ok.txt")
        assert not validator.is_valid("bad|name.txt")
