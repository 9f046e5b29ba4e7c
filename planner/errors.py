"""Canonical error types for the trip planner.

Standard form validation codes:
- TRIP_DETAILS_INCOMPLETE: Destination or trip dates missing
- DESTINATION_TOO_SHORT: Destination shorter than 4 characters
- TRIP_DATES_REQUIRED: Trip update without destination or a complete range
- TRIP_DATE_UNAVAILABLE: Trip date disabled on the calendar (before today)
- INVALID_EMAIL: Guest e-mail is not a valid address
- DUPLICATE_EMAIL: Guest e-mail already invited
- GUEST_INCOMPLETE: Presence confirmation without name or e-mail
- ACTIVITY_INCOMPLETE: Activity without title, date or hour
- INVALID_ACTIVITY_HOUR: Activity hour is not an hour of the day
- LINK_TITLE_REQUIRED: Link without title
- INVALID_LINK_URL: Link URL is not an http(s) URL
"""


class PlannerError(RuntimeError):
    """Base class for every error raised by the planner."""


class FormValidationError(PlannerError):
    """Raised when a form cannot be submitted.

    Attributes:
        code: Stable error code (e.g., "DESTINATION_TOO_SHORT")
        message: User-facing message
        title: Title of the dialog the message is shown in
    """

    def __init__(self, code: str, message: str, title: str = ""):
        self.code = code
        self.message = message
        self.title = title
        super().__init__(f"{code}: {message}")


class PlannerAPIError(PlannerError):
    """Raised when the planner API rejects a request or cannot be reached.

    Attributes:
        status_code: HTTP status code, None for transport failures
        detail: Error detail from the response body or the transport
        path: Request path
    """

    def __init__(self, status_code: int | None, detail: str, path: str):
        self.status_code = status_code
        self.detail = detail
        self.path = path
        super().__init__(f"{path} -> {status_code}: {detail}")


class UnknownLocaleError(PlannerError):
    """Raised when a date locale code is not registered."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown date locale: {code}")
