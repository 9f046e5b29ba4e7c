from planner.errors import FormValidationError
from planner.forms.validation import is_valid_url

LINK_TITLE = "Link"


def validate_link(title: str, url: str) -> tuple[str, str]:
    """Validate the "new link" form and return stripped (title, url)."""
    title = title.strip()
    url = url.strip()
    if not title:
        raise FormValidationError("LINK_TITLE_REQUIRED", "Informe o título do link.", LINK_TITLE)
    if not is_valid_url(url):
        raise FormValidationError("INVALID_LINK_URL", "Link inválido.", LINK_TITLE)
    return title, url
