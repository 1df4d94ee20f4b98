"""Mailer logging bootstrap on top of lib_log_rich.

The composer and its adapters only ever call ``logging.getLogger(__name__)``
and attach structured ``extra`` fields (recipients, message id, error
code). This module starts the lib_log_rich runtime once per process and
bridges stdlib logging into it, so those records reach the console and any
configured sinks tagged with the mailer's service name and environment.

Contents:
    * :class:`LoggingConfigModel` - validated ``[lib_log_rich]`` section.
    * :func:`init_logging` - idempotent runtime start, used by ``bootstrap``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from postmark_composer import __init__conf__

DEFAULT_LOG_ENVIRONMENT = "prod"


class LoggingConfigModel(BaseModel):
    """The ``[lib_log_rich]`` section.

    ``service`` and ``environment`` are optional here because both have
    mailer-aware fallbacks. Any other key is forwarded to
    ``lib_log_rich.runtime.RuntimeConfig`` untouched.

    Example:
        >>> LoggingConfigModel(environment="staging", console_level="DEBUG").model_extra
        {'console_level': 'DEBUG'}
        >>> LoggingConfigModel().environment is None
        True
    """

    service: str | None = None
    environment: str | None = None

    model_config = ConfigDict(extra="allow")


def _section(config: Config, name: str) -> dict[str, Any]:
    raw: object = config.get(name, default={})
    return dict(cast("Mapping[str, Any]", raw)) if isinstance(raw, Mapping) else {}


def _log_environment(parsed: LoggingConfigModel, config: Config) -> str:
    """Pick the environment label stamped on every log record.

    An explicit ``[lib_log_rich] environment`` wins. Otherwise the mailer's
    own ``current_environment`` is used, so staging mail redirects and
    staging logs carry the same label.

    Example:
        >>> config = Config({"mailer": {"current_environment": "staging"}}, {})
        >>> _log_environment(LoggingConfigModel(), config)
        'staging'
        >>> _log_environment(LoggingConfigModel(environment="qa"), config)
        'qa'
        >>> _log_environment(LoggingConfigModel(), Config({}, {}))
        'prod'
    """
    if parsed.environment:
        return parsed.environment
    mailer_environment = _section(config, "mailer").get("current_environment")
    if isinstance(mailer_environment, str) and mailer_environment:
        return mailer_environment
    return DEFAULT_LOG_ENVIRONMENT


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    parsed = LoggingConfigModel.model_validate(_section(config, "lib_log_rich"))
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=_log_environment(parsed, config),
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Start lib_log_rich for the mailer and route stdlib loggers into it.

    ``.env`` files are read first so ``LOG_*`` overrides apply. A runtime
    that is already running (started by the embedding application, or by
    an earlier ``bootstrap``) is left as it is.

    Args:
        config: Layered configuration holding the ``[lib_log_rich]`` and
            ``[mailer]`` sections.

    Example:
        >>> config = Config({"mailer": {"current_environment": "staging"}}, {})
        >>> init_logging(config)  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "DEFAULT_LOG_ENVIRONMENT",
    "LoggingConfigModel",
    "init_logging",
]
