"""Persisted prediction endpoint configuration with change notification"""

import logging
from typing import Callable, List

from pydantic import HttpUrl, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from fraud_monitor.config import settings
from fraud_monitor.domain.exceptions import InvalidEndpointError
from fraud_monitor.domain.models import EndpointConfig
from fraud_monitor.infrastructure.database.repositories import SettingsRepository

ENDPOINT_SETTING_KEY = "fraud_api_url"

EndpointListener = Callable[[EndpointConfig], None]

_http_url = TypeAdapter(HttpUrl)


def normalize_base_url(base_url: str) -> str:
    """
    Validate an endpoint base URL and strip trailing slashes.

    Raises:
        InvalidEndpointError: If the URL is not an absolute http(s) URL
    """
    candidate = (base_url or "").strip()
    try:
        _http_url.validate_python(candidate)
    except ValidationError as e:
        raise InvalidEndpointError(f"Invalid prediction API URL: {candidate!r}") from e
    return candidate.rstrip("/")


class EndpointConfigStore:
    """
    Source of truth for where predictions are requested.

    Consumers read `current()` and pass the result explicitly into
    enrichment; those that must react to changes `subscribe()`.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        default_base_url: str | None = None,
        timeout_seconds: float | None = None,
        fallback_fraud_count: int | None = None,
    ):
        self.session_factory = session_factory
        self.default_base_url = default_base_url or settings.prediction_api_base
        self.timeout_seconds = timeout_seconds or settings.prediction_timeout_seconds
        self.fallback_fraud_count = (
            fallback_fraud_count if fallback_fraud_count is not None else settings.fallback_fraud_count
        )
        self._listeners: List[EndpointListener] = []

    def current(self) -> EndpointConfig:
        db = self.session_factory()
        try:
            base_url = SettingsRepository(db).get(ENDPOINT_SETTING_KEY)
        finally:
            db.close()
        return self._config(base_url or self.default_base_url)

    def update(self, base_url: str) -> EndpointConfig:
        """Persist a new base URL and notify subscribers"""
        normalized = normalize_base_url(base_url)

        db = self.session_factory()
        try:
            SettingsRepository(db).set(ENDPOINT_SETTING_KEY, normalized)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

        config = self._config(normalized)
        logging.info("Prediction endpoint updated", extra={"base_url": normalized})
        self._notify(config)
        return config

    def subscribe(self, listener: EndpointListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, config: EndpointConfig) -> None:
        for listener in list(self._listeners):
            try:
                listener(config)
            except Exception as e:
                # One failing listener must not starve the others
                logging.error(f"Endpoint listener failed: {e}", extra={"listener": repr(listener)})

    def _config(self, base_url: str) -> EndpointConfig:
        return EndpointConfig(
            base_url=base_url,
            timeout_seconds=self.timeout_seconds,
            fallback_fraud_count=self.fallback_fraud_count,
        )
