from pydantic import EmailStr, HttpUrl, TypeAdapter, ValidationError

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(HttpUrl)


def is_valid_email(text: str) -> bool:
    try:
        _email_adapter.validate_python(text)
    except ValidationError:
        return False
    return True


def is_valid_url(text: str) -> bool:
    """Accept absolute http(s) URLs only."""
    try:
        _url_adapter.validate_python(text)
    except ValidationError:
        return False
    return True
