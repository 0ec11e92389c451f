"""Implementation of (Move)Oracle over HTTP, using httpx"""

import logging
from typing import Optional, Self

import httpx

from src.api.models import AnalyzeMoveRequest, AnalyzeMoveResponse
from src.core.config import Settings

logger = logging.getLogger(__name__)

ANALYZE_ENDPOINT = "/analyze"


class HttpMoveOracle:
    """POSTs every question to the oracle's single `/analyze` endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        return cls(settings.oracle_url, timeout=settings.oracle_timeout)

    async def analyze(self, request: AnalyzeMoveRequest) -> AnalyzeMoveResponse:
        """Network or parse failures never leave this method: they turn into a rejection."""
        url = f"{self.base_url}{ANALYZE_ENDPOINT}"
        logger.debug("Calling oracle: %s", url)
        try:
            response = await self.client.post(url, json=request.to_json())
            response.raise_for_status()
            verdict = AnalyzeMoveResponse.model_validate(response.json())
        except httpx.HTTPError as exc:
            logger.warning("Oracle call failed: %s", exc)
            return AnalyzeMoveResponse.failed(request)
        except ValueError as exc:
            # invalid JSON or a payload that does not fit the response model
            logger.warning("Oracle returned an unreadable response: %s", exc)
            return AnalyzeMoveResponse.failed(request)

        logger.debug("Oracle response: %s", verdict)
        return verdict

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
