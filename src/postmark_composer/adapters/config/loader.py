"""Layered loading of the ``[mailer]`` and ``[lib_log_rich]`` settings.

The bundled ``defaultconfig.toml`` holds every mailer key with a safe
default. Deployments override it layer by layer (app, host, user, ``.env``,
process environment), typically pinning ``mailer.current_environment`` in
the host file and supplying ``mailer.server_token`` from the environment so
the token never lands in a checked-in file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from postmark_composer import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Callable loader that also exposes ``cache_clear`` for tests."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that cannot safely become a directory name.

    A profile such as ``staging`` selects ``profile/staging/`` below each
    configuration directory, which is how one host keeps separate mailer
    settings (safe address, environment label) per deployment.

    Raises:
        ValueError: On an empty, overlong, reserved or path-escaping name.

    Examples:
        >>> validate_profile("staging")
        >>> validate_profile("../mailer")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../mailer
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Locate the ``defaultconfig.toml`` shipped next to this module.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=4)
def _get_config_impl(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Read the mailer configuration through every layer.

    Later layers win key by key, so a host file that only sets
    ``[mailer] current_environment = "staging"`` keeps every other bundled
    default. The result is cached per ``(profile, start_dir)``; a mailer
    process reads its settings once.

    Args:
        profile: Optional profile selecting ``profile/<name>/`` config files.
        start_dir: Directory where ``.env`` discovery starts; the working
            directory when None.

    Example:
        >>> mailer = get_config().as_dict()["mailer"]
        >>> mailer["error_report_route"], mailer["production_environments"]
        ('provider', ['production'])
    """
    if profile is not None:
        validate_profile(profile)
    return _get_config_impl(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Forget loaded settings so the next call re-reads every layer."""
    _get_config_impl.cache_clear()


# cache_clear is lost on the cast to the Protocol type, so attach it explicitly.
_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
