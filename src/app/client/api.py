"""Client – POST /api/analyze round trip."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from src.app.config import ANALYZE_PATH, SchemaVersion, settings
from src.app.errors import NetworkError, ParseError, SchemaMismatchError
from src.app.schemas.analyze import AnalyzeResponse

logger = logging.getLogger(__name__)


class AnalysisClient:
    """Sends a data URI to the analysis endpoint and returns its envelope.

    The underlying ``httpx.AsyncClient`` can be injected (tests pass one
    built on ``httpx.MockTransport`` or ``httpx.ASGITransport``).
    """

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        schema_version: SchemaVersion | None = None,
    ) -> None:
        self._http = http or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or settings.client_timeout,
        )
        self.schema_version = schema_version or settings.schema_version

    async def aclose(self) -> None:
        await self._http.aclose()

    async def analyze(self, data_uri: str) -> AnalyzeResponse:
        try:
            response = await self._http.post(ANALYZE_PATH, json={"image": data_uri})
        except httpx.HTTPError as exc:
            raise NetworkError(str(exc)) from exc

        if response.is_error:
            logger.warning("Analysis endpoint returned %s: %s", response.status_code, response.text)
            raise NetworkError(f"Server error: {response.status_code}", response.status_code)

        try:
            envelope = AnalyzeResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Malformed analysis envelope: %s", exc)
            raise ParseError("Malformed response from analysis endpoint") from exc

        if envelope.schema_version is not None and envelope.schema_version != self.schema_version:
            raise SchemaMismatchError(
                f"Server answers with the '{envelope.schema_version}' schema, "
                f"client expects '{self.schema_version}'"
            )
        return envelope
