import logging
from typing import Optional
from urllib.parse import quote

import httpx

from eventapi.config import Settings
from eventapi.core.exceptions import ServiceCommunicationError, UserNotFoundError
from eventapi.schemas.identity import IdentityUser

logger = logging.getLogger(__name__)


class IdentityClient:
    """Identity service client (user lookup by email).

    Transport failures surface as ServiceCommunicationError and are never
    retried here; the caller decides whether to retry.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityClient":
        return cls(
            base_url=settings.IDENTITY_SERVICE_URL,
            api_key=settings.INTERNAL_API_KEY,
            timeout=settings.IDENTITY_TIMEOUT_SECONDS,
        )

    async def resolve_user_by_email(self, email: str) -> IdentityUser:
        url = f"{self.base_url}/internal/users/by-email/{quote(email, safe='@')}"
        headers = {"x-api-key": self.api_key} if self.api_key else {}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Identity lookup failed for {email}: {type(e).__name__}: {e}")
            raise ServiceCommunicationError(details={"reason": type(e).__name__}) from e

        if response.status_code == 404:
            raise UserNotFoundError(details={"email": email})
        if response.status_code >= 400:
            logger.error(
                f"Identity lookup for {email} returned {response.status_code}"
            )
            raise ServiceCommunicationError(
                details={"status_code": response.status_code}
            )

        try:
            data = response.json() if response.content else None
        except ValueError as e:
            raise ServiceCommunicationError(
                "Invalid response from identity service"
            ) from e

        if not isinstance(data, dict):
            raise UserNotFoundError(details={"email": email})
        user_id = data.get("id") or data.get("_id")
        if not user_id:
            raise UserNotFoundError(details={"email": email})

        return IdentityUser(
            id=str(user_id),
            email=str(data.get("email") or email),
            role=data.get("role"),
        )
