"""Mailer configuration model and loader.

Provides the MailerConfig Pydantic model for validated, immutable mailer
settings and the loader function to create it from configuration
dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from btx_lib_mail import validate_email_address, validate_smtp_host
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from postmark_composer.domain.enums import ErrorReportRoute
from postmark_composer.domain.errors import ConfigurationError
from postmark_composer.domain.models import Address, EnvironmentPolicy

DEFAULT_API_URL = "https://api.postmarkapp.com"

_REDACTED_FIELDS = frozenset({"server_token", "direct_smtp_password"})


class MailerConfig(BaseModel):
    """Validated, immutable mailer configuration.

    Required settings are checked by :meth:`missing_settings` rather than
    at parse time, so a partially configured model can still be built
    from layered sources and inspected.

    Example:
        >>> config = MailerConfig(
        ...     server_token="token",
        ...     error_email_address="errors@example.com",
        ...     safe_email_address="safe@example.com",
        ...     view_path="/srv/app/views/mail",
        ...     current_environment="staging",
        ...     production_environments="production",
        ... )
        >>> sorted(config.production_environments)
        ['production']
        >>> config.missing_settings()
        []
    """

    model_config = ConfigDict(frozen=True)

    server_token: str | None = None
    error_email_address: str | None = None
    safe_email_address: str | None = None
    safe_email_name: str | None = None
    from_address: str | None = None
    view_path: str | None = None
    current_environment: str | None = None
    production_environments: frozenset[str] = Field(default_factory=frozenset)

    view_rendering: bool = True
    environment_redirection: bool = True
    error_report_route: ErrorReportRoute = ErrorReportRoute.PROVIDER

    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0

    # Direct-send settings, used only when error_report_route is "direct"
    direct_smtp_hosts: list[str] = Field(default_factory=lambda: ["localhost"])
    direct_smtp_username: str | None = None
    direct_smtp_password: str | None = None
    direct_use_starttls: bool = False
    direct_timeout: float = 30.0

    @field_validator(
        "server_token",
        "error_email_address",
        "safe_email_address",
        "safe_email_name",
        "from_address",
        "view_path",
        "current_environment",
        "direct_smtp_username",
        "direct_smtp_password",
        mode="before",
    )
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Coerce empty or whitespace-only strings to None.

        Treats empty strings from config files as "not configured" rather
        than explicit empty values, so a blank TOML entry counts as missing.
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("production_environments", mode="before")
    @classmethod
    def _coerce_environments_to_set(cls, v: Any) -> frozenset[str]:
        """Normalize a single label or a list of labels to a frozenset.

        Examples:
            >>> sorted(MailerConfig._coerce_environments_to_set("production"))
            ['production']
            >>> sorted(MailerConfig._coerce_environments_to_set(["prod", "live", ""]))
            ['live', 'prod']
            >>> MailerConfig._coerce_environments_to_set(None)
            frozenset()
        """
        if v is None:
            return frozenset()
        if isinstance(v, str):
            return frozenset({v.strip()}) if v.strip() else frozenset()
        if isinstance(v, (list, tuple, set, frozenset)):
            labels = [str(label).strip() for label in cast(list[Any], list(v))]
            return frozenset(label for label in labels if label)
        return cast(frozenset[str], v)

    @field_validator("direct_smtp_hosts", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[str]:
        """Coerce a single host string to a single-element list.

        Examples:
            >>> MailerConfig._coerce_string_to_list("localhost:25")
            ['localhost:25']
            >>> MailerConfig._coerce_string_to_list("")
            []
        """
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, list):
            return cast(list[str], v)
        return []

    @model_validator(mode="after")
    def _validate_config(self) -> MailerConfig:
        """Validate address formats, hosts and timeouts.

        Raises:
            ValueError: When configuration values are invalid.

        Example:
            >>> MailerConfig(timeout=0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.direct_timeout <= 0:
            raise ValueError(f"direct_timeout must be positive, got {self.direct_timeout}")
        if not self.api_url.startswith(("https://", "http://")):
            raise ValueError(f"api_url must be an http(s) URL, got {self.api_url!r}")

        for address in (self.error_email_address, self.safe_email_address, self.from_address):
            if address is not None:
                validate_email_address(address)

        for host in self.direct_smtp_hosts:
            validate_smtp_host(host)

        return self

    def missing_settings(self) -> list[str]:
        """Return the names of required settings that are not configured.

        The provider credential, error address and safe address are always
        required. ``view_path`` is required when view rendering is enabled,
        the environment settings when redirection is enabled.

        Example:
            >>> MailerConfig(view_rendering=False, environment_redirection=False).missing_settings()
            ['server_token', 'error_email_address', 'safe_email_address']
        """
        required = ["server_token", "error_email_address", "safe_email_address"]
        if self.view_rendering:
            required.append("view_path")
        if self.environment_redirection:
            required.extend(["current_environment", "production_environments"])
        return [name for name in required if not getattr(self, name)]

    def require_complete(self) -> None:
        """Raise unless every required setting is configured.

        Raises:
            ConfigurationError: Naming the first missing setting.

        Example:
            >>> MailerConfig(server_token="token").require_complete()  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ConfigurationError: error_email_address must be set
        """
        missing = self.missing_settings()
        if missing:
            raise ConfigurationError(f"{missing[0]} must be set")

    def environment_policy(self) -> EnvironmentPolicy:
        """Build the redirection policy from the configured environment settings.

        Raises:
            ConfigurationError: When the environment or addresses are not set.
        """
        if self.current_environment is None or self.safe_email_address is None or self.error_email_address is None:
            raise ConfigurationError("environment redirection requires current_environment and both addresses")
        return EnvironmentPolicy(
            current_environment=self.current_environment,
            production_environments=self.production_environments,
            safe_address=Address(self.safe_email_address, self.safe_email_name),
            error_address=self.error_email_address,
        )

    def __repr__(self) -> str:
        """Return string representation with credentials redacted.

        Example:
            >>> config = MailerConfig(server_token="secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name in _REDACTED_FIELDS and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"MailerConfig({', '.join(fields)})"


def load_mailer_config_from_dict(config_dict: Mapping[str, Any]) -> MailerConfig:
    """Load MailerConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    MailerConfig model. The nested ``[mailer.direct]`` TOML section is
    flattened with a ``direct_`` prefix to match MailerConfig field names.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a 'mailer' section.

    Returns:
        Validated mailer settings with defaults for missing values.

    Raises:
        ConfigurationError: When the section holds invalid values.

    Example:
        >>> config = load_mailer_config_from_dict(
        ...     {
        ...         "mailer": {
        ...             "server_token": "token",
        ...             "production_environments": ["production"],
        ...             "direct": {"smtp_hosts": ["mail.internal:25"]},
        ...         }
        ...     }
        ... )
        >>> config.direct_smtp_hosts
        ['mail.internal:25']
        >>> config.error_report_route.value
        'provider'
    """
    mailer_section: Any = config_dict.get("mailer", {})

    try:
        if not isinstance(mailer_section, Mapping):
            return MailerConfig.model_validate(mailer_section)

        mailer_raw: dict[str, Any] = dict(cast(Mapping[str, Any], mailer_section))

        direct_raw: dict[str, Any] = mailer_raw.pop("direct", {})
        for key, value in direct_raw.items():
            mailer_raw[f"direct_{key}"] = value

        return MailerConfig.model_validate(mailer_raw if mailer_raw else {})
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Invalid mailer configuration: {exc}") from exc


__all__ = [
    "DEFAULT_API_URL",
    "MailerConfig",
    "load_mailer_config_from_dict",
]
