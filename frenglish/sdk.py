"""
Client for the Frenglish translation service.

Every endpoint is a JSON ``POST`` authorised with a bearer token. The
client is stateless apart from its HTTP session: it sends requests and
returns parsed results, raising RemoteRequestError on any non-success
status. No call is retried.

Usage:
    client = FrenglishClient(api_key="...")
    response = client.translate(["{\"hi\": \"Hello\"}"], filenames=["app.json"])
    for entry in response.content:
        print(entry.language, [f.file_id for f in entry.files])
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Optional

import requests

from frenglish.config import (
    DEFAULT_BACKEND_URL,
    MAX_POLLING_TIME,
    POLL_INTERVAL,
    REQUEST_TIMEOUT,
    Settings,
)
from frenglish.errors import (
    PollTimeoutError,
    RemoteRequestError,
    TranslationCancelledError,
)
from frenglish.keys import require_key
from frenglish.models import (
    Configuration,
    FileContentWithLanguage,
    TranslationRequest,
    TranslationResponse,
    TranslationStatus,
)

logger = logging.getLogger(__name__)


class FrenglishClient:
    """Thin wrapper around the translation service HTTP API.

    ``session``, ``sleep`` and ``clock`` can be injected, which is how the
    tests drive the client without a network.
    """

    def __init__(
        self,
        api_key: Optional[str],
        backend_url: str = DEFAULT_BACKEND_URL,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
        poll_timeout: float = MAX_POLLING_TIME,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.api_key = api_key
        self.backend_url = backend_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.poll_timeout = poll_timeout
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> FrenglishClient:
        """Create a client, raising ConfigurationError if no API key is set."""
        return cls(
            api_key=require_key(settings.api_key),
            backend_url=settings.backend_url,
            timeout=settings.request_timeout,
            poll_interval=settings.poll_interval,
            poll_timeout=settings.poll_timeout,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _post(
        self,
        endpoint: str,
        body: Optional[dict] = None,
        error_message: str = "Request failed",
        authorized: bool = True,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if authorized and self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        url = f"{self.backend_url}{endpoint}"
        logger.debug("POST %s", url)
        response = self.session.post(
            url,
            headers=headers,
            data=json.dumps(body) if body is not None else None,
            timeout=self.timeout,
        )
        if not response.ok:
            raise RemoteRequestError(
                error_message,
                status_code=response.status_code,
                reason=response.reason or "",
                body=response.text or "",
            )
        if not response.content:
            return None
        return response.json()

    def _body(self, **fields) -> dict:
        body = {"apiKey": self.api_key}
        body.update(fields)
        return body

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def request_translation(self, request: TranslationRequest) -> int:
        """Submit a translation and return its id."""
        data = self._post(
            "/api/translation/request-translation",
            self._body(**request.to_dict()),
            "Failed to request translation",
        )
        return int(data["translationId"])

    def get_translation_status(self, translation_id: int) -> Optional[TranslationStatus]:
        """Current status, or None if the service reports something unknown."""
        data = self._post(
            "/api/translation/get-status",
            self._body(translationId=translation_id),
            "Failed to get translation status",
        )
        status = data.get("status") if isinstance(data, dict) else data
        return TranslationStatus.parse(status)

    def get_translation_content(self, translation_id: int) -> list:
        """Raw translated content: ``[{language, files: [{fileId, content}]}]``."""
        data = self._post(
            "/api/translation/get-translation",
            self._body(translationId=translation_id),
            "Failed to get translation",
        )
        return data or []

    def wait_for_completion(self, translation_id: int) -> None:
        """
        Poll until the translation completes.

        Raises:
            TranslationCancelledError: The service cancelled the translation
            RemoteRequestError: The service reported it as failed
            PollTimeoutError: Still running after ``poll_timeout`` seconds
        """
        start = self._clock() - self.poll_interval
        while self._clock() - start < self.poll_timeout:
            status = self.get_translation_status(translation_id)
            logger.debug("Translation %s status: %s", translation_id, status)

            if status is TranslationStatus.COMPLETED:
                return
            if status is TranslationStatus.CANCELLED:
                raise TranslationCancelledError(translation_id)
            if status is TranslationStatus.FAILED:
                raise RemoteRequestError(f"Translation {translation_id} failed")

            self._sleep(self.poll_interval)

        raise PollTimeoutError(translation_id, self._clock() - start)

    def translate(
        self,
        content: list[str],
        is_full_translation: bool = False,
        filenames: Optional[list[str]] = None,
        partial_config: Optional[dict] = None,
    ) -> TranslationResponse:
        """Submit, wait for completion, and fetch the translated files."""
        request = TranslationRequest(
            content=list(content),
            filenames=list(filenames or []),
            is_full_translation=is_full_translation,
            partial_config=partial_config,
        )
        translation_id = self.request_translation(request)
        logger.info("Translation requested with ID: %s", translation_id)

        self.wait_for_completion(translation_id)
        return TranslationResponse.from_content(
            translation_id, self.get_translation_content(translation_id)
        )

    def translate_string(
        self,
        content: str,
        lang: str,
        partial_config: Optional[dict] = None,
    ) -> Optional[str]:
        """
        Translate a single string into ``lang``.

        Raises:
            ValueError: If ``lang`` is not a supported language
        """
        supported = self.get_supported_languages()
        if lang not in supported:
            raise ValueError(
                f"Language '{lang}' is not supported. "
                f"Supported languages are: {', '.join(supported)}"
            )

        body = self._body(content=content, lang=lang)
        if partial_config is not None:
            body["partialConfig"] = partial_config
        data = self._post(
            "/api/translation/request-translation-string",
            body,
            "Failed to request translation",
        )
        translation_id = int(data["translationId"])

        self.wait_for_completion(translation_id)
        response = TranslationResponse.from_content(
            translation_id, self.get_translation_content(translation_id)
        )
        if not response.content or not response.content[0].files:
            return None
        translated = response.content[0].files[0].content
        if not translated:
            return None
        parsed = json.loads(translated)
        if isinstance(parsed, dict):
            return next(iter(parsed.values()), None)
        return str(parsed)

    # ------------------------------------------------------------------
    # Baseline files and project metadata
    # ------------------------------------------------------------------

    def upload(self, files: list[FileContentWithLanguage]) -> Any:
        """Upload existing files (all languages) as the comparison baseline."""
        return self._post(
            "/api/translation/upload-files",
            self._body(files=[f.to_dict() for f in files]),
            "Failed to upload files",
        )

    def get_supported_languages(self) -> list[str]:
        data = self._post(
            "/api/translation/supported-languages",
            self._body(),
            "Failed to get supported languages",
            authorized=False,
        )
        return [str(lang).lower() for lang in data or []]

    def get_supported_file_types(self) -> list[str]:
        data = self._post(
            "/api/translation/supported-file-types",
            None,
            "Failed to get supported file types",
            authorized=False,
        )
        return [str(ext) for ext in data or []]

    def get_default_configuration(self) -> Configuration:
        data = self._post(
            "/api/configuration/get-default-configuration",
            self._body(),
            "Failed to get default configuration",
            authorized=False,
        )
        return Configuration.from_dict(data or {})

    def get_project_supported_languages(self) -> dict:
        """``{"languages": [...], "originLanguage": "en"}`` for this project."""
        return self._post(
            "/api/configuration/get-project-supported-languages",
            self._body(),
            "Failed to get project supported languages",
        ) or {}

    def get_text_map(self) -> Optional[dict]:
        return self._post(
            "/api/project/request-text-map",
            self._body(),
            "Failed to request text map",
        )

    def get_public_api_key_from_domain(self, domain: str) -> str:
        return self._post(
            "/api/project/get-public-api-key-from-domain",
            self._body(domainURL=domain),
            "Failed to get public API key from domain",
            authorized=False,
        )

    def get_project_domain(self) -> str:
        return self._post(
            "/api/project/get-project-domain",
            self._body(),
            "Failed to get project domain",
        )

    def register_webhook(self, webhook_url: str) -> None:
        self._post(
            "/api/webhook/register-webhook",
            self._body(webhookUrl=webhook_url),
            "Failed to register webhook",
        )
