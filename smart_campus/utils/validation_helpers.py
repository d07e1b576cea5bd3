import re
from smart_campus.utils.errors import ValidationError

EDU_EMAIL = re.compile(r"^[\w.-]+@[\w.-]+\.edu$")


def require_text(value, field):
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} cannot be empty")
    return str(value).strip()


def validate_edu_email(value):
    value = require_text(value, "Email")
    if not EDU_EMAIL.match(value):
        raise ValidationError("Email must be a valid .edu address")
    return value


def validate_capacity(value):
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError("Capacity must be a positive whole number")
    return value
