from hypothesis import given, settings, strategies as st
import pytest

from portfolio_api.validations import (
    sanitize_input,
    trim,
    validate_contact_form,
    validate_email,
    validate_message,
    validate_name,
)


def test_name_length_boundaries():
    assert validate_name("J") == "Name must be at least 2 characters"
    assert validate_name("Jo") is None
    assert validate_name("a" * 50) is None
    assert validate_name("a" * 51) == "Name must be at most 50 characters"


def test_name_is_trimmed_before_checks():
    assert validate_name("   J   ") == "Name must be at least 2 characters"
    assert validate_name("  John Doe  ") is None


def test_trim_follows_browser_whitespace():
    assert trim("\ufeff\u3000 Jo\u00a0") == "Jo"
    assert trim("\x1cJo\x85") == "\x1cJo\x85"


def test_validators_trim_byte_order_mark_but_not_control_separators():
    assert validate_name("\ufeffJo") is None
    assert validate_email("\ufeffjohn@example.com\ufeff") is None
    assert validate_name("\x1cJo") == "Name can only contain letters and spaces"
    assert validate_email("jo\x85hn@example.com") is None


@pytest.mark.parametrize("name", ["O'Brien", "Jean-Luc", "Zoë", "R2D2", "John\nDoe!"])
def test_name_rejects_anything_but_ascii_letters_and_spaces(name):
    assert validate_name(name) == "Name can only contain letters and spaces"


def test_email_required():
    assert validate_email("") == "Email is required"
    assert validate_email("   ") == "Email is required"


@pytest.mark.parametrize("email", ["john.example.com", "john@", "john@example", "jo hn@example.com", "a@@b.c"])
def test_email_rejects_malformed_addresses(email):
    assert validate_email(email) == "Please enter a valid email address"


@pytest.mark.parametrize("email", ["john@example.com", "  first.last+tag@sub.domain.org  ", "a@b.c"])
def test_email_accepts_simple_addresses(email):
    assert validate_email(email) is None


def test_message_length_boundaries():
    assert validate_message("x" * 9) == "Message must be at least 10 characters"
    assert validate_message("x" * 10) is None
    assert validate_message("x" * 1000) is None
    assert validate_message("x" * 1001) == "Message must be at most 1000 characters"
    assert validate_message("   short   ") == "Message must be at least 10 characters"


def test_contact_form_reports_only_failing_fields():
    errors = validate_contact_form(
        {"name": "J", "email": "john@example.com", "message": "This is a valid test message.", "honeypot": ""}
    )
    assert errors == {"name": "Name must be at least 2 characters"}


def test_contact_form_valid_payload_has_no_errors():
    errors = validate_contact_form(
        {"name": "John Doe", "email": "john@example.com", "message": "This is a valid test message.", "honeypot": ""}
    )
    assert errors == {}


def test_contact_form_collects_all_errors():
    errors = validate_contact_form({"name": "", "email": "", "message": "", "honeypot": ""})
    assert set(errors) == {"name", "email", "message"}
    assert errors["email"] == "Email is required"


def test_sanitize_escapes_every_special_character():
    assert sanitize_input("&<>\"'/`=") == "&amp;&lt;&gt;&quot;&#x27;&#x2F;&#x60;&#x3D;"


def test_sanitize_script_tag():
    result = sanitize_input('<script>alert("x")</script>')
    assert "&lt;script&gt;" in result
    assert "<script>" not in result
    assert result == "&lt;script&gt;alert(&quot;x&quot;)&lt;&#x2F;script&gt;"


def test_sanitize_does_not_rescan_produced_entities():
    assert sanitize_input("&amp;") == "&amp;amp;"
    assert sanitize_input("<") == "&lt;"


def test_sanitize_leaves_plain_text_alone():
    assert sanitize_input("John Doe") == "John Doe"
    assert sanitize_input("") == ""


@settings(max_examples=200)
@given(text=st.text())
def test_sanitized_output_never_contains_angle_brackets(text: str):
    result = sanitize_input(text)
    assert "<" not in result
    assert ">" not in result
