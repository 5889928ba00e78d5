from __future__ import annotations

from ..common.validators import (
    email_field,
    one_of,
    password_policy,
    required_bool,
    required_string,
    required_text,
)
from ..core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from ..core.enums import Role

SIGNUP_RULES = [
    required_string("name", max_length=MAX_NAME_LENGTH, label="Name"),
    email_field("email", max_length=MAX_EMAIL_LENGTH),
    password_policy("password"),
    one_of("role", [r.value for r in Role], message="Role must be admin or employee"),
]

LOGIN_RULES = [
    email_field("email", max_length=MAX_EMAIL_LENGTH),
    required_text("password", message="Password is required"),
]

SET_ACTIVE_RULES = [
    required_bool("is_active"),
]
