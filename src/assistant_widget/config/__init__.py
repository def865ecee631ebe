"""Configuration module for the assistant widget."""

from .settings import (
    AppConfig,
    ChatSettings,
    WidgetSettings,
    get_app_config,
    get_app_data_dir,
    load_config,
    reset_config,
    save_config,
)

__all__ = [
    "AppConfig",
    "ChatSettings",
    "WidgetSettings",
    "get_app_config",
    "get_app_data_dir",
    "load_config",
    "reset_config",
    "save_config",
]
