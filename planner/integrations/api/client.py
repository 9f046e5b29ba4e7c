"""HTTP client for the plann.er trip API.

Covers trips, activities, links and participants. Every endpoint answers
with a small JSON envelope ({"trip": ...}, {"tripId": ...}, {"links": [...]});
the client unwraps it and returns typed models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx
from loguru import logger

from planner.config.settings import settings
from planner.errors import PlannerAPIError
from planner.integrations.api.schemas import (
    DayActivities,
    Link,
    Participant,
    TripCreate,
    TripDetails,
    TripUpdate,
)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "message" in body:
        return str(body["message"])
    return str(body)


class PlannerAPIClient:
    """Thin synchronous client for the trip API.

    - One httpx.Client per instance
    - No retries
    - Non-2xx responses and transport failures raise PlannerAPIError
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root. If not provided, reads PLANNER_API_URL from settings.
            timeout: Request timeout in seconds. If not provided, reads from settings.
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.api_timeout,
            transport=transport,
        )

    def __enter__(self) -> PlannerAPIClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        try:
            response = self._client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.warning(f"[API] {method} {path} failed with {e.response.status_code}: {detail}")
            raise PlannerAPIError(e.response.status_code, detail, path) from e
        except httpx.RequestError as e:
            logger.error(f"[API] {method} {path} could not reach {self.base_url}: {e!r}")
            raise PlannerAPIError(None, str(e), path) from e

        logger.debug(f"[API] {method} {path} -> {response.status_code}")
        if not response.content:
            return None
        return response.json()

    # Trips

    def create_trip(self, payload: TripCreate) -> str:
        """Create a trip owned by the configured owner and invite guests.

        Returns:
            The new trip id
        """
        body = {
            "owner_name": settings.owner_name,
            "owner_email": settings.owner_email,
            **payload.model_dump(mode="json"),
        }
        data = self._request("POST", "/trips", json=body)
        trip_id = data["tripId"]
        logger.info(f"[API] Created trip {trip_id} to {payload.destination} with {len(payload.emails_to_invite)} guest(s)")
        return trip_id

    def get_trip(self, trip_id: str) -> TripDetails:
        data = self._request("GET", f"/trips/{trip_id}")
        return TripDetails.model_validate(data["trip"])

    def update_trip(self, payload: TripUpdate) -> None:
        body = payload.model_dump(mode="json", exclude={"id"})
        self._request("PUT", f"/trips/{payload.id}", json=body)
        logger.info(f"[API] Updated trip {payload.id}")

    # Activities

    def create_activity(self, trip_id: str, occurs_at: datetime, title: str) -> str:
        data = self._request(
            "POST",
            f"/trips/{trip_id}/activities",
            json={"occurs_at": occurs_at.isoformat(), "title": title},
        )
        return data["activityId"]

    def get_activities(self, trip_id: str) -> list[DayActivities]:
        data = self._request("GET", f"/trips/{trip_id}/activities")
        return [DayActivities.model_validate(day) for day in data.get("activities", [])]

    # Links

    def create_link(self, trip_id: str, title: str, url: str) -> str:
        data = self._request("POST", f"/trips/{trip_id}/links", json={"title": title, "url": url})
        return data["linkId"]

    def get_links(self, trip_id: str) -> list[Link]:
        data = self._request("GET", f"/trips/{trip_id}/links")
        return [Link.model_validate(link) for link in data.get("links", [])]

    # Participants

    def get_participants(self, trip_id: str) -> list[Participant]:
        data = self._request("GET", f"/trips/{trip_id}/participants")
        return [Participant.model_validate(p) for p in data.get("participants", [])]

    def confirm_participant(self, participant_id: str, name: str, email: str) -> None:
        self._request("PATCH", f"/participants/{participant_id}/confirm", json={"name": name, "email": email})
        logger.info(f"[API] Participant {participant_id} confirmed presence")
