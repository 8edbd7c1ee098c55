import asyncio

import httpx
import pytest

from eventapi.core.exceptions import ServiceCommunicationError, UserNotFoundError
from eventapi.services.identity_client import IdentityClient


def make_client(handler, api_key="secret"):
    return IdentityClient(
        base_url="http://gateway.test/v1/",
        api_key=api_key,
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestIdentityClient:
    def test_resolves_user(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["api_key"] = request.headers.get("x-api-key")
            return httpx.Response(
                200, json={"id": "inviter-1", "email": "inviter@example.com", "role": "USER"}
            )

        user = asyncio.run(make_client(handler).resolve_user_by_email("inviter@example.com"))

        assert user.id == "inviter-1"
        assert user.email == "inviter@example.com"
        assert seen["path"].startswith("/v1/internal/users/by-email/")
        assert seen["api_key"] == "secret"

    def test_no_api_key_header_when_not_configured(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["api_key"] = request.headers.get("x-api-key")
            return httpx.Response(200, json={"_id": "inviter-1", "email": "a@example.com"})

        user = asyncio.run(
            make_client(handler, api_key="").resolve_user_by_email("a@example.com")
        )

        assert user.id == "inviter-1"
        assert seen["api_key"] is None

    def test_404_is_user_not_found(self):
        client = make_client(lambda request: httpx.Response(404, json={"message": "not found"}))
        with pytest.raises(UserNotFoundError):
            asyncio.run(client.resolve_user_by_email("nobody@example.com"))

    def test_empty_body_is_user_not_found(self):
        client = make_client(lambda request: httpx.Response(200, content=b""))
        with pytest.raises(UserNotFoundError):
            asyncio.run(client.resolve_user_by_email("nobody@example.com"))

    def test_server_error_is_service_communication(self):
        client = make_client(lambda request: httpx.Response(503))
        with pytest.raises(ServiceCommunicationError) as exc_info:
            asyncio.run(client.resolve_user_by_email("a@example.com"))
        assert exc_info.value.status_code == 502

    def test_transport_error_is_service_communication(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ServiceCommunicationError):
            asyncio.run(make_client(handler).resolve_user_by_email("a@example.com"))
        # 재시도하지 않음
        assert len(calls) == 1

    def test_timeout_is_service_communication(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ServiceCommunicationError):
            asyncio.run(make_client(handler).resolve_user_by_email("a@example.com"))


class TestIdentityClientContainer:
    """컨테이너에서 꺼낸 식별 서비스 클라이언트"""

    def test_app_container_provides_single_client(self, app):
        # Given: create_app()으로 만든 애플리케이션
        services = app.container.services

        # When: 클라이언트를 두 번 조회하면
        first = services.identity_client()
        second = services.identity_client()

        # Then: 설정값으로 만든 같은 인스턴스가 반환됨
        assert isinstance(first, IdentityClient)
        assert first is second
