"""Application context holding the active configuration.

The context lives in a ``ContextVar`` so overrides stay local to the task or
thread that installed them.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel

from src.inventory.runtime.config.config_data import ConfigData
from src.inventory.runtime.config.config_template import load_config

# Derived from other fields; dumping them would freeze stale values into a merge
_COMPUTED = {"database": {"password", "connection_string"}}


def _explicit_fields(model: BaseModel) -> dict[str, Any]:
    """Fields set on ``model`` by the caller, descending into nested models."""
    explicit: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                explicit[name] = nested
            elif name in model.model_fields_set:
                explicit[name] = value.model_dump()
        elif name in model.model_fields_set:
            explicit[name] = value
    return explicit


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class AppContext:
    """Application-wide state visible to the current task."""

    config: ConfigData

    def overridden_by(self, override: ConfigData) -> "AppContext":
        """Return a context whose config takes every field ``override`` sets."""
        merged = _deep_merge(
            self.config.model_dump(exclude=_COMPUTED), _explicit_fields(override)
        )
        return replace(self, config=ConfigData.model_validate(merged))


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_config())
)


def get_context() -> AppContext:
    """Get the application context of the current task.

    Returns:
        AppContext: The active context holding the configuration.
    """
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Install ``context`` for the current task.

    Args:
        context: Context to make current.

    Returns:
        Token[AppContext]: Token that restores the previous context on reset.
    """
    return _app_context.set(context)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily apply ``config_override`` on top of the current config.

    Only fields set on the override change, so a partial override inherits
    the rest from the enclosing context.

    Args:
        config_override: Partial configuration to apply, or None for no change.

    Raises:
        ValueError: ``config_override`` is not a ``ConfigData``.

    Example:
        override = ConfigData()
        override.pagination.max_page_size = 5
        with with_context(override):
            assert get_config().pagination.max_page_size == 5
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    token = set_context(get_context().overridden_by(config_override))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the whole configuration of the current context.

    Unlike ``with_context`` the change is not undone automatically.

    Args:
        config: Complete configuration to install.
    """
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Get the active configuration.

    Returns:
        ConfigData: Configuration of the current context.
    """
    return get_context().config
