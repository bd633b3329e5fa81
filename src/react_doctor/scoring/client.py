# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Remote scoring service client with a deterministic local fallback."""

from __future__ import annotations

import http.client
import json
import logging
import os
import ssl
import urllib.error
import urllib.request
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Final, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from .. import __version__
from ..constants import (
    ESTIMATE_SCORE_API_URL,
    ESTIMATE_SCORE_API_URL_ENV,
    SCORE_API_URL,
    SCORE_API_URL_ENV,
    SCORE_REQUEST_TIMEOUT_SECONDS,
)
from ..core.models import Diagnostic, EstimatedScoreResult, ScoreResult
from .local import estimate_score_locally

LOGGER = logging.getLogger(__name__)

_USER_AGENT: Final[str] = f"react-doctor-py/{__version__}"
_REQUEST_ERRORS: Final[tuple[type[BaseException], ...]] = (
    urllib.error.URLError,
    http.client.HTTPException,
    OSError,
    ValueError,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResponseLike(Protocol):
    """Subset of :class:`http.client.HTTPResponse` used by the client."""

    status: int

    def read(self) -> bytes: ...

    def __enter__(self) -> ResponseLike: ...

    def __exit__(self, *exc_info: object) -> None: ...


class OpenerLike(Protocol):
    """Subset of :class:`urllib.request.OpenerDirector` used by the client."""

    def open(self, fullurl: urllib.request.Request, data: None = None, timeout: float = ...) -> ResponseLike: ...


def build_diagnostic_payload(diagnostics: Iterable[Diagnostic]) -> dict[str, list[dict[str, str]]]:
    """Return the request body; only rule identity and severity are sent.

    Args:
        diagnostics: Diagnostics to describe.

    Returns:
        dict[str, list[dict[str, str]]]: JSON-serialisable request body.
    """

    return {
        "diagnostics": [
            {"plugin": diag.plugin, "rule": diag.rule, "severity": diag.severity.value} for diag in diagnostics
        ],
    }


def _default_opener() -> OpenerLike:
    return urllib.request.build_opener(urllib.request.HTTPSHandler(context=ssl.create_default_context()))


@dataclass(slots=True)
class ScoreClient:
    """Query the scoring service for authoritative and estimated scores."""

    score_url: str = SCORE_API_URL
    estimate_url: str = ESTIMATE_SCORE_API_URL
    timeout: float = SCORE_REQUEST_TIMEOUT_SECONDS
    offline: bool = False
    opener: OpenerLike = field(default_factory=_default_opener)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, *, offline: bool = False) -> ScoreClient:
        """Build a client honouring endpoint overrides from the environment.

        Args:
            env: Environment mapping; defaults to :data:`os.environ`.
            offline: When ``True`` no network request is ever made.

        Returns:
            ScoreClient: Configured client.
        """

        source = os.environ if env is None else env
        return cls(
            score_url=source.get(SCORE_API_URL_ENV) or SCORE_API_URL,
            estimate_url=source.get(ESTIMATE_SCORE_API_URL_ENV) or ESTIMATE_SCORE_API_URL,
            offline=offline,
        )

    def calculate_score(self, diagnostics: Iterable[Diagnostic]) -> ScoreResult | None:
        """Return the authoritative score, or ``None`` when the service is unavailable.

        There is no local fallback: an unreachable service means no score.
        """

        if self.offline:
            return None
        return self._post(self.score_url, list(diagnostics), ScoreResult)

    def fetch_estimated_score(self, diagnostics: Iterable[Diagnostic]) -> EstimatedScoreResult:
        """Return the projected post-fix score, falling back to the local estimate.

        This method never raises for network, status or parsing failures.
        """

        collected = list(diagnostics)
        if not self.offline:
            remote = self._post(self.estimate_url, collected, EstimatedScoreResult)
            if remote is not None:
                return remote
        return estimate_score_locally(collected)

    def _post(self, url: str, diagnostics: list[Diagnostic], model: type[ModelT]) -> ModelT | None:
        body = json.dumps(build_diagnostic_payload(diagnostics)).encode("utf-8")
        request = urllib.request.Request(
            url,
            data=body,
            method="POST",
            headers={"Content-Type": "application/json", "User-Agent": _USER_AGENT},
        )
        try:
            with self.opener.open(request, timeout=self.timeout) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    LOGGER.debug("scoring service %s returned status %s", url, status)
                    return None
                payload = json.loads(response.read().decode("utf-8"))
            return model.model_validate(payload)
        except ValidationError as exc:
            LOGGER.debug("scoring service %s returned an unexpected body: %s", url, exc)
            return None
        except _REQUEST_ERRORS as exc:
            LOGGER.debug("scoring service %s unavailable: %s", url, exc)
            return None


__all__ = ["ScoreClient", "build_diagnostic_payload"]
