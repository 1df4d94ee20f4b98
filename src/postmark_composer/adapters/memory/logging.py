"""In-memory logging initializer for testing.

Stands in for :func:`postmark_composer.adapters.logging.init_logging` so
``bootstrap`` can be exercised without starting the process-wide
lib_log_rich runtime. Mail log records still flow through stdlib logging,
where pytest's ``caplog`` picks them up.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, cast

from lib_layered_config import Config


def _empty_config_list() -> list[Config]:
    return []


@dataclass
class LoggingInitSpy:
    """Records every configuration logging was initialised with.

    Example:
        >>> spy = LoggingInitSpy()
        >>> spy(Config({"mailer": {"current_environment": "staging"}}, {}))
        >>> spy.environments
        ['staging']
    """

    configs: list[Config] = field(default_factory=_empty_config_list)

    def __call__(self, config: Config) -> None:
        self.configs.append(config)

    @property
    def environments(self) -> list[str | None]:
        """The ``mailer.current_environment`` seen by each initialisation."""
        seen: list[str | None] = []
        for config in self.configs:
            mailer: object = config.get("mailer", default={})
            section = cast("Mapping[str, Any]", mailer) if isinstance(mailer, Mapping) else {}
            seen.append(section.get("current_environment"))
        return seen


__all__ = ["LoggingInitSpy"]
