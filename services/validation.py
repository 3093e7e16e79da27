from typing import Any, Dict, Mapping, NamedTuple

from email_validator import EmailNotValidError, validate_email

POST_TEXT_MAX = 300
NAME_MIN, NAME_MAX = 2, 30
PASSWORD_MIN, PASSWORD_MAX = 6, 30


class ValidationResult(NamedTuple):
    errors: Dict[str, str]
    is_valid: bool


def _text(data: Mapping[str, Any], field: str) -> str:
    value = data.get(field)
    if value is None:
        return ""
    return str(value)


def _is_empty(value: str) -> bool:
    return not value.strip()


def _is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _result(errors: Dict[str, str]) -> ValidationResult:
    return ValidationResult(errors=errors, is_valid=not errors)


def validate_post_input(data: Mapping[str, Any]) -> ValidationResult:
    """Validate the body of a post or a comment"""
    errors = {}
    text = _text(data, "text")

    if _is_empty(text):
        errors["text"] = "Text field is required"
    elif len(text) > POST_TEXT_MAX:
        errors["text"] = f"Post must be at most {POST_TEXT_MAX} characters"

    return _result(errors)


def validate_register_input(data: Mapping[str, Any]) -> ValidationResult:
    errors = {}
    name = _text(data, "name")
    email = _text(data, "email")
    password = _text(data, "password")
    password2 = _text(data, "password2")

    if _is_empty(name):
        errors["name"] = "Name field is required"
    elif not NAME_MIN <= len(name.strip()) <= NAME_MAX:
        errors["name"] = f"Name must be between {NAME_MIN} and {NAME_MAX} characters"

    if _is_empty(email):
        errors["email"] = "Email field is required"
    elif not _is_email(email):
        errors["email"] = "Email is invalid"

    if _is_empty(password):
        errors["password"] = "Password field is required"
    elif not PASSWORD_MIN <= len(password) <= PASSWORD_MAX:
        errors["password"] = f"Password must be between {PASSWORD_MIN} and {PASSWORD_MAX} characters"

    if _is_empty(password2):
        errors["password2"] = "Confirm password field is required"
    elif password != password2:
        errors["password2"] = "Passwords must match"

    return _result(errors)


def validate_login_input(data: Mapping[str, Any]) -> ValidationResult:
    errors = {}
    email = _text(data, "email")
    password = _text(data, "password")

    if _is_empty(email):
        errors["email"] = "Email field is required"
    elif not _is_email(email):
        errors["email"] = "Email is invalid"

    if _is_empty(password):
        errors["password"] = "Password field is required"

    return _result(errors)
