"""
Judge0 Client

Sends source code to the Judge0 submissions API and returns the raw
result payload. Execution happens entirely on the judge; this module
only handles language mapping and transport errors.
"""

from typing import Any, Dict, Optional, Tuple
import logging

import httpx

from codeclash.core.config import Settings
from codeclash.core.exceptions import JudgeUnavailableError, UnsupportedLanguageError
from codeclash.models.submission import Language

logger = logging.getLogger(__name__)

# Judge0 CE language ids
LANGUAGE_IDS: Dict[Language, int] = {
    Language.CPP: 54,
    Language.JAVA: 62,
    Language.PYTHON: 71,
    Language.JAVASCRIPT: 63,
}

SUBMIT_PATH = "/submissions/"
SUBMIT_PARAMS = {"base64_encoded": "false", "wait": "true"}


def resolve_language(language: Optional[str]) -> Tuple[Language, int]:
    """Map a submission language name to (Language, judge language id)."""
    try:
        resolved = Language(language)
    except ValueError:
        raise UnsupportedLanguageError(
            "Unsupported language",
            details={"language": language, "supported": [lang.value for lang in Language]},
        )
    return resolved, LANGUAGE_IDS[resolved]


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class Judge0Client:
    """
    Thin async wrapper over the Judge0 HTTP API.

    One instance is created per process in the app lifespan and shared
    by all requests. Calls are not retried.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        api_host: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["X-RapidAPI-Key"] = api_key
            if api_host:
                headers["X-RapidAPI-Host"] = api_host

        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Judge0Client":
        return cls(
            base_url=settings.JUDGE0_API_URL,
            api_key=settings.RAPIDAPI_KEY,
            api_host=settings.RAPIDAPI_HOST,
            timeout=settings.JUDGE0_TIMEOUT_SECONDS,
        )

    async def submit(
        self,
        source_code: str,
        language_id: int,
        stdin: str = "",
        expected_output: str = "",
    ) -> Dict[str, Any]:
        """
        Run one submission synchronously on the judge (wait=true).

        Raises JudgeUnavailableError on transport failure, non-2xx status,
        or a body that is not a JSON object.
        """
        payload = {
            "source_code": source_code,
            "language_id": language_id,
            "stdin": stdin,
            "expected_output": expected_output,
        }

        try:
            response = await self._client.post(SUBMIT_PATH, params=SUBMIT_PARAMS, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Judge0 request failed: {e}")
            raise JudgeUnavailableError("Failed to submit to Judge0", details=str(e) or type(e).__name__)

        if response.is_error:
            details = _error_payload(response)
            logger.error(f"Judge0 returned {response.status_code}: {details}")
            raise JudgeUnavailableError("Failed to submit to Judge0", details=details)

        try:
            result = response.json()
        except ValueError:
            logger.error("Judge0 returned a non-JSON body")
            raise JudgeUnavailableError("Failed to submit to Judge0", details=response.text)

        if not isinstance(result, dict):
            raise JudgeUnavailableError("Failed to submit to Judge0", details=result)

        logger.info(f"Judge0 response: {result}")
        return result

    async def close(self) -> None:
        await self._client.aclose()
