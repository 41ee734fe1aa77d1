"""Client for a deployed hint service (``POST /api/signal``)."""

from __future__ import annotations

from typing import Optional

import httpx

from codementor.config import settings
from codementor.models import HintResponse, SignalRequest


class HintServiceClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base = (base_url or settings.HINT_SERVICE_URL).rstrip("/")
        self.client = httpx.Client(
            base_url=self.base,
            headers={"content-type": "application/json"},
            timeout=timeout or settings.HINT_SERVICE_TIMEOUT,
            transport=transport,
        )

    def send_signal(self, request: SignalRequest) -> HintResponse:
        """Send one signal event, return the service's hint decision."""
        r = self.client.post(
            "/api/signal",
            json=request.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        r.raise_for_status()
        return HintResponse.model_validate(r.json())

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "HintServiceClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
