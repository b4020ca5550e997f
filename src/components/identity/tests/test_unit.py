"""
Identity component unit tests.

Covers name rules (empty, length in graphemes, forbidden characters)
and email syntax rules.
"""

from __future__ import annotations

import pytest

from src.components.identity import (
    FORBIDDEN_NAME_CHARACTERS,
    SubscriberEmail,
    SubscriberName,
    count_graphemes,
    validate_email,
    validate_name,
    validate_new_subscriber,
)
from src.core.errors import ValidationError

# --- Names ---


class TestValidateName:
    def test_a_256_grapheme_name_is_valid(self) -> None:
        name = validate_name("a" * 256)
        assert name.value == "a" * 256

    def test_a_name_longer_than_256_graphemes_is_invalid(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_name("a" * 257)
        assert exc_info.value.field == "name"

    def test_combining_marks_count_as_one_character(self) -> None:
        # "e" + COMBINING ACUTE ACCENT is two code points, one grapheme
        name = "e\u0301" * 256
        assert len(name) == 512
        assert validate_name(name).value == name

    def test_whitespace_only_names_are_invalid(self) -> None:
        with pytest.raises(ValidationError):
            validate_name("   ")

    def test_empty_names_are_invalid(self) -> None:
        with pytest.raises(ValidationError):
            validate_name("")

    @pytest.mark.parametrize("char", sorted(FORBIDDEN_NAME_CHARACTERS))
    def test_names_with_forbidden_characters_are_invalid(self, char: str) -> None:
        with pytest.raises(ValidationError):
            validate_name(f"Ursula {char} Le Guin")

    def test_valid_names_are_valid(self) -> None:
        assert validate_name("Ursula Le Guin") == SubscriberName("Ursula Le Guin")

    def test_name_is_kept_verbatim(self) -> None:
        assert validate_name("  le guin ").value == "  le guin "


class TestCountGraphemes:
    def test_ascii(self) -> None:
        assert count_graphemes("abc") == 3

    def test_emoji_with_modifier(self) -> None:
        # thumbs up + skin tone modifier
        assert count_graphemes("\U0001F44D\U0001F3FD") == 1


# --- Emails ---


class TestValidateEmail:
    def test_valid_email_is_accepted(self) -> None:
        email = validate_email("ursula_le_guin@gmail.com")
        assert email == SubscriberEmail("ursula_le_guin@gmail.com")
        assert str(email) == "ursula_le_guin@gmail.com"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "ursuladomain.com",
            "@domain.com",
            "ursula@",
            "ursula@localhost",
            "not-an-email",
            "ursula@@domain.com",
        ],
    )
    def test_invalid_emails_are_rejected(self, raw: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_email(raw)
        assert exc_info.value.field == "email"


class TestValidateNewSubscriber:
    def test_valid_pair(self) -> None:
        new = validate_new_subscriber("le guin", "ursula_le_guin@gmail.com")
        assert new.name.value == "le guin"
        assert new.email.value == "ursula_le_guin@gmail.com"

    def test_name_checked_before_email(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_new_subscriber("", "not-an-email")
        assert exc_info.value.field == "name"
