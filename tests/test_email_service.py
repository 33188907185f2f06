"""Tests for the Resend notification service."""

import json

import httpx
import pytest

from portal.services.email_service import (
    RESEND_API_URL,
    EmailService,
    render_application_confirmation,
    render_status_update,
    status_color,
)


def _capture(status_code=200, body=None):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=body if body is not None else {"id": "msg_123"})

    return requests, httpx.MockTransport(handler)


@pytest.mark.parametrize(
    "status,color",
    [
        ("shortlisted", "#22c55e"),
        ("rejected", "#ef4444"),
        ("accepted", "#FFD700"),
        ("pending", "#FFD700"),
    ],
)
def test_status_color(status, color):
    assert status_color(status) == color
    assert color in render_status_update("Asha", "Backend Intern", status, "", "OctaIQ")


def test_status_update_escapes_and_includes_message():
    html = render_status_update("<Asha>", "Backend Intern", "rejected", "Thanks & good luck", "OctaIQ")
    assert "&lt;Asha&gt;" in html
    assert "Thanks &amp; good luck" in html


def test_confirmation_mentions_role_and_brand():
    html = render_application_confirmation("Asha", "Backend Intern", "OctaIQ")
    assert "Backend Intern" in html
    assert "The OctaIQ Team" in html


async def test_send_without_api_key_is_noop_success():
    requests, transport = _capture()
    service = EmailService(api_key="", transport=transport)

    result = await service.send_status_update("asha@example.com", "Asha", "Backend Intern", "shortlisted")

    assert result.success is True
    assert requests == []


async def test_send_status_update_posts_to_resend():
    requests, transport = _capture()
    service = EmailService(api_key="re_test", sender="OctaIQ <noreply@octaiq.com>", transport=transport)

    result = await service.send_status_update(
        "asha@example.com", "Asha", "Backend Intern", "shortlisted", "Interview on Monday"
    )

    assert result.success is True
    assert result.message_id == "msg_123"
    assert len(requests) == 1
    request = requests[0]
    assert str(request.url) == RESEND_API_URL
    assert request.headers["Authorization"] == "Bearer re_test"
    payload = json.loads(request.content)
    assert payload["to"] == ["asha@example.com"]
    assert payload["subject"] == "Application Shortlisted - OctaIQ"
    assert "#22c55e" in payload["html"]
    assert "Interview on Monday" in payload["html"]


async def test_confirmation_subject():
    requests, transport = _capture()
    service = EmailService(api_key="re_test", transport=transport)

    await service.send_application_confirmation("asha@example.com", "Asha", "Backend Intern")

    assert json.loads(requests[0].content)["subject"] == "Application Received - OctaIQ Internship"


async def test_provider_error_returns_failure_result():
    _, transport = _capture(status_code=422, body={"message": "invalid from"})
    service = EmailService(api_key="re_test", transport=transport)

    result = await service.send_application_confirmation("asha@example.com", "Asha", "Backend Intern")

    assert result.success is False
    assert result.error


async def test_transport_error_returns_failure_result():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    service = EmailService(api_key="re_test", transport=httpx.MockTransport(handler))

    result = await service.send_application_confirmation("asha@example.com", "Asha", "Backend Intern")

    assert result.success is False
    assert "connection refused" in result.error
