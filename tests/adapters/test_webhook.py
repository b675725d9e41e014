from __future__ import annotations

import json

import httpx
import pytest

from peerhub.adapters.webhook import (
    IMPORT_EVENT,
    WebhookDeliveryError,
    WebhookNotifier,
    build_webhook_payload,
)
from peerhub.config import WebhookConfig
from peerhub.domain.transfer import ImportReport, ImportResult

REPORT = ImportReport(
    results=(
        ImportResult.succeeded("a"),
        ImportResult.failed("b", "Peer with this name already exists"),
    )
)


def test_build_webhook_payload() -> None:
    assert build_webhook_payload(REPORT) == {
        "event": IMPORT_EVENT,
        "imported": 1,
        "failed": 1,
        "results": [
            {"success": True, "name": "a"},
            {"success": False, "name": "b", "error": "Peer with this name already exists"},
        ],
    }


def test_notifier_posts_summary() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(204)

    notifier = WebhookNotifier(
        url="https://hooks.example.test/peers",
        retries=0,
        transport=httpx.MockTransport(handler),
    )

    notifier(REPORT)

    (request,) = requests
    assert request.method == "POST"
    assert str(request.url) == "https://hooks.example.test/peers"
    assert json.loads(request.content)["imported"] == 1


def test_notifier_raises_on_error_status() -> None:
    notifier = WebhookNotifier(
        url="https://hooks.example.test/peers",
        retries=0,
        transport=httpx.MockTransport(lambda _request: httpx.Response(500)),
    )

    with pytest.raises(WebhookDeliveryError, match="hooks.example.test"):
        notifier(REPORT)


def test_notifier_raises_on_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    notifier = WebhookNotifier(
        url="https://hooks.example.test/peers",
        retries=0,
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(WebhookDeliveryError):
        notifier(REPORT)


def test_from_config_is_disabled_without_url() -> None:
    assert WebhookNotifier.from_config(WebhookConfig()) is None

    notifier = WebhookNotifier.from_config(
        WebhookConfig(url="https://hooks.example.test", timeout_seconds=2.5, retries=1)
    )

    assert notifier is not None
    assert notifier.timeout_seconds == 2.5
    assert notifier.retries == 1
