"""
Google Gemini scoring client.

Implements the scoring capability on top of the ``google-genai`` SDK. All
provider and network errors are converted to ``ScoringTransportError`` so
the adapter sees one transport failure type.
"""

from __future__ import annotations

from typing import Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..core.config import Settings, load_settings
from ..core.errors import ScoringTransportError, TransportReason, reason_for_status
from ..core.observability import get_logger
from ..core.prompts import ScoringRequest

logger = get_logger(__name__)


class GeminiScoringClient:
    """
    Client for the Gemini ``generate_content`` API.

    Features:
    - JSON output constrained by the response schema
    - Low temperature for consistent scoring
    - Uniform transport error mapping
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize the Gemini client.

        Args:
            settings: Application settings. Defaults to ``load_settings()``
            client: Pre-built SDK client (tests); created lazily otherwise
        """
        self.settings = settings or load_settings()
        self._client = client

    def _ensure_client(self) -> genai.Client:
        if self._client is None:
            if not self.settings.has_credentials:
                raise ScoringTransportError(
                    "GOOGLE_API_KEY is not configured",
                    reason=TransportReason.AUTHENTICATION,
                )
            self._client = genai.Client(api_key=self.settings.google_api_key)
        return self._client

    @staticmethod
    def build_config(request: ScoringRequest) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=request.system_instruction,
            temperature=request.temperature,
            response_mime_type="application/json",
            response_json_schema=request.response_schema,
        )

    async def generate(self, request: ScoringRequest) -> Optional[str]:
        """
        Run one scoring call.

        Returns:
            Raw response text, or None when the model produced no content

        Raises:
            ScoringTransportError: credential missing, API error, or any failure of the request itself
        """
        client = self._ensure_client()

        try:
            response = await client.aio.models.generate_content(
                model=request.model,
                contents=request.prompt,
                config=self.build_config(request),
            )
        except genai_errors.APIError as exc:
            logger.warning(
                "gemini_api_error",
                transaction_id=request.transaction_id,
                status_code=exc.code,
                status=exc.status,
            )
            raise ScoringTransportError(
                f"Gemini API error {exc.code}: {exc.message}",
                reason=reason_for_status(exc.code),
                status_code=exc.code,
            ) from exc
        except (httpx.TimeoutException, TimeoutError) as exc:
            raise ScoringTransportError(
                f"Gemini request timed out: {exc}",
                reason=TransportReason.TIMEOUT,
            ) from exc
        except (httpx.HTTPError, OSError) as exc:
            raise ScoringTransportError(
                f"Gemini request failed: {exc}",
                reason=TransportReason.NETWORK,
            ) from exc
        except Exception as exc:
            # The async transport may be aiohttp rather than httpx
            logger.warning(
                "gemini_request_error",
                transaction_id=request.transaction_id,
                error_type=type(exc).__name__,
                exc_info=True,
            )
            raise ScoringTransportError(
                f"Gemini request failed: {type(exc).__name__}: {exc}",
                reason=TransportReason.UNKNOWN,
            ) from exc

        return response.text


__all__ = ["GeminiScoringClient"]
