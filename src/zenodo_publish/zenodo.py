import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union
from urllib.parse import quote

import requests

from .config import ConfigService, ZENODO_TIMEOUT, ZENODO_TOKEN_PRODUCTION, ZENODO_TOKEN_SANDBOX
from .errors import ApiError, ConfigError, NoSuchFile, TokenMissing, TransportError, UploadRejected
from .files import FileService

logger = logging.getLogger(__name__)

ZENODO_URL = "https://zenodo.org/"
ZENODO_SANDBOX_URL = "https://sandbox.zenodo.org/"

DEPOSITIONS_LIST = "api/deposit/depositions"
DEPOSITIONS_CREATE = "api/deposit/depositions"
DEPOSITIONS_FILES_UPLOAD = "api/deposit/depositions/{id}/files"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_MULTIPART = "multipart/form-data"

DEFAULT_TIMEOUT = 30

UPLOAD_REJECTED_MESSAGE = "Problems occurred while uploading your document. Contact your administrator"


class Environment(Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"

    @property
    def base_url(self) -> str:
        return ZENODO_URL if self is Environment.PRODUCTION else ZENODO_SANDBOX_URL

    @property
    def token_key(self) -> str:
        return ZENODO_TOKEN_PRODUCTION if self is Environment.PRODUCTION else ZENODO_TOKEN_SANDBOX


@dataclass
class RequestSpec:
    method: str = "GET"
    content_type: str = CONTENT_TYPE_JSON
    body: Any = None
    files: Optional[dict] = None


@dataclass
class DepositionSuccess:
    id: Any
    fields: dict

    ok = True


@dataclass
class DepositionFailure:
    status: Optional[int]
    messages: list[str] = field(default_factory=list)

    ok = False

    @property
    def message(self) -> str:
        return "; ".join(self.messages)


DepositionResult = Union[DepositionSuccess, DepositionFailure]


@dataclass
class UploadOutcome:
    """Every part of ``file_id`` was accepted by ``deposition_id``."""

    deposition_id: str
    file_id: str
    uploaded: list[str]


class ZenodoAPI:
    """Client for the Zenodo deposition API.

    A client is bound to one environment by :meth:`init` and is meant to be
    used for a single logical operation; it is not safe to share between
    threads.
    """

    def __init__(
            self,
            config: Optional[ConfigService] = None,
            file_service: Optional[FileService] = None,
            timeout: Optional[float] = None
    ):
        self.config = config or ConfigService()
        self.file_service = file_service or FileService()
        self.environment: Optional[Environment] = None
        self.token = ""

        if timeout is None:
            configured_timeout = self.config.get_app_value(ZENODO_TIMEOUT)
            try:
                timeout = float(configured_timeout) if configured_timeout else DEFAULT_TIMEOUT
            except ValueError as e:
                raise ConfigError(f"Invalid {ZENODO_TIMEOUT}: {configured_timeout!r}") from e
        self.timeout = timeout

    def init(self, production: bool = False) -> None:
        """Select the environment and resolve its access token.

        Raises :class:`TokenMissing` when no token is configured for it.
        """
        environment = Environment.PRODUCTION if production else Environment.SANDBOX
        if self.environment is not None and self.environment is not environment:
            raise ConfigError(f"Client already initialized for {self.environment.value}")

        logger.debug("Initializing ZenodoAPI with environment=%s", environment.value)
        token = self.config.get_app_value(environment.token_key)
        if not token:
            raise TokenMissing()

        self.environment = environment
        self.token = token

    def configured(self) -> bool:
        return self.token != ""

    def build_url(self, path: str) -> str:
        if self.environment is None or not self.configured():
            raise TokenMissing()

        separator = "&" if "?" in path else "?"
        return f"{self.environment.base_url}{path}{separator}access_token={quote(self.token, safe='')}"

    def _masked(self, url: str) -> str:
        if not self.token:
            return url
        return url.replace(quote(self.token, safe=""), "***").replace(self.token, "***")

    def dispatch(self, url: str, request: RequestSpec) -> Any:
        """Perform an HTTP request and return the decoded JSON answer.

        Zenodo reports refusals in the payload, so the answer is decoded
        whatever its HTTP status.
        """
        method = request.method.upper()
        headers = {}
        data = None
        files = None

        # requests writes the multipart header itself, boundary included
        if request.content_type != CONTENT_TYPE_MULTIPART:
            headers["Content-Type"] = request.content_type

        if method == "POST":
            data = request.body
            files = request.files

        logger.debug("%s %s", method, self._masked(url))

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=headers,
                data=data,
                files=files,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {self._masked(url)} failed: {self._masked(str(e))}") from e

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"{method} {self._masked(url)} returned a non-JSON answer (HTTP {response.status_code})"
            ) from e

    def list_depositions(self) -> Any:
        """Return the user's depositions exactly as Zenodo sends them."""
        url = self.build_url(DEPOSITIONS_LIST)
        depositions = self.dispatch(url, RequestSpec("GET"))
        logger.info("Listed depositions on %s", self.environment.value)
        return depositions

    def create_deposition(self, metadata: Any) -> DepositionResult:
        url = self.build_url(DEPOSITIONS_CREATE)
        response = self.dispatch(url, RequestSpec("POST", CONTENT_TYPE_JSON, json.dumps(metadata)))

        if isinstance(response, dict) and "created" in response:
            logger.info("Created deposition %s", response.get("id"))
            return DepositionSuccess(response.get("id"), response)

        status = response.get("status") if isinstance(response, dict) else None
        errors = response.get("errors") if isinstance(response, dict) else None
        messages = []
        for error in errors if isinstance(errors, list) else []:
            if not isinstance(error, dict):
                continue
            message = error.get("message")
            if message is None and isinstance(error.get("messages"), list):
                message = " ".join(str(m) for m in error["messages"])
            messages.append(f"{error.get('field') or ''} - {message or ''}")

        logger.info("Deposition refused by Zenodo (status %s)", status)
        return DepositionFailure(status, messages)

    def upload_file(self, deposition_id: Union[str, int], file_id: str) -> UploadOutcome:
        """Upload every part of ``file_id`` to a deposition.

        Parts are sent one after the other and the first refusal stops the
        batch with :class:`UploadRejected`.
        """
        files = self.file_service.get_files_per_file_id(file_id)
        if not files:
            raise NoSuchFile(file_id)

        url = self.build_url(DEPOSITIONS_FILES_UPLOAD.format(id=deposition_id))
        logger.info("Uploading %d part(s) of %s to deposition %s", len(files), file_id, deposition_id)

        uploaded = []
        for physical_file in files:
            file_path = self.file_service.get_absolute_path(physical_file)
            name = os.path.basename(file_path)

            try:
                f = open(file_path, "rb")
            except OSError as e:
                raise ApiError(f"Could not read {name}: {e}") from e

            with f:
                response = self.dispatch(
                    url,
                    RequestSpec(
                        "POST",
                        CONTENT_TYPE_MULTIPART,
                        body={"name": name},
                        files={"file": (name, f)}
                    )
                )

            if isinstance(response, dict) and response.get("status") == 400:
                raise UploadRejected(UPLOAD_REJECTED_MESSAGE, status=400)

            logger.debug("Uploaded %s", name)
            uploaded.append(name)

        logger.info("All parts of %s uploaded", file_id)
        return UploadOutcome(str(deposition_id), file_id, uploaded)
