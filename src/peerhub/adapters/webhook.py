"""Notify an HTTP endpoint after an import batch stored at least one peer."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from peerhub.config import WebhookConfig
    from peerhub.domain.transfer import ImportReport

log = getLogger(__name__)

IMPORT_EVENT: Final[str] = "peers.imported"


class WebhookDeliveryError(RuntimeError):
    """Raised when the webhook endpoint cannot be reached or rejects the event."""


def build_webhook_payload(report: ImportReport) -> dict[str, object]:
    results: list[dict[str, object]] = []
    for result in report.results:
        entry: dict[str, object] = {"success": result.success, "name": result.name}
        if result.error is not None:
            entry["error"] = result.error
        results.append(entry)
    return {
        "event": IMPORT_EVENT,
        "imported": report.success_count,
        "failed": report.fail_count,
        "results": results,
    }


@dataclass(slots=True)
class WebhookNotifier:
    url: str
    timeout_seconds: float = 10.0
    retries: int = 3
    transport: httpx.BaseTransport | None = None

    @classmethod
    def from_config(cls, config: WebhookConfig) -> WebhookNotifier | None:
        if config.url is None:
            return None
        return cls(url=config.url, timeout_seconds=config.timeout_seconds, retries=config.retries)

    def _retry(self) -> Retry:
        return Retry(
            total=self.retries,
            backoff_factor=0.5,
            allowed_methods=("POST",),
            status_forcelist=(429, 500, 502, 503, 504),
        )

    def __call__(self, report: ImportReport) -> None:
        transport = RetryTransport(
            transport=self.transport or httpx.HTTPTransport(),
            retry=self._retry(),
        )
        try:
            with httpx.Client(transport=transport, timeout=self.timeout_seconds) as client:
                response = client.post(self.url, json=build_webhook_payload(report))
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise WebhookDeliveryError(f"Webhook delivery to {self.url} failed: {exc}") from exc
        log.info("Notified %s about %s imported peers", self.url, report.success_count)
