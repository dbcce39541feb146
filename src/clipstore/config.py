"""Client configuration for clipstore."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from clipstore._constants import BASE_URL_ENV, LEGACY_BASE_URL_ENV, REQUEST_TIMEOUT_ENV, USER_AGENT
from clipstore.exceptions import ClipStoreConfigError


@dataclasses.dataclass(frozen=True)
class ClipStoreConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the clipboard service, e.g. ``"https://clip.example.com/api"``.
        There is no default; a missing or malformed value raises
        :class:`~clipstore.exceptions.ClipStoreConfigError` here, once,
        rather than on every call.
    request_timeout : float or None
        Total deadline per request in seconds.  ``None`` (the default)
        waits indefinitely.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str
    request_timeout: float | None = None
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        url = (self.base_url or "").strip()
        if not url:
            raise ClipStoreConfigError("base_url is required")
        if not url.startswith(("http://", "https://")):
            raise ClipStoreConfigError(f"base_url must be an http(s) URL, got {url!r}")
        # Endpoint paths carry their own leading slash.
        object.__setattr__(self, "base_url", url.rstrip("/"))

        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ClipStoreConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ClipStoreConfig:
        """Create configuration from environment variables.

        Reads ``CLIPSTORE_BASE_URL`` (falling back to
        ``VITE_API_SERVICE_URL``) and ``CLIPSTORE_REQUEST_TIMEOUT``.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ClipStoreConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get(BASE_URL_ENV) or env.get(LEGACY_BASE_URL_ENV)
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        timeout_env = env.get(REQUEST_TIMEOUT_ENV)
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise ClipStoreConfigError(
                    f"{REQUEST_TIMEOUT_ENV} must be a number, got {timeout_env!r}"
                ) from exc

        config_kwargs.update(overrides)

        if not config_kwargs.get("base_url"):
            raise ClipStoreConfigError(f"{BASE_URL_ENV} is not set and no base_url was given")

        return cls(**config_kwargs)
