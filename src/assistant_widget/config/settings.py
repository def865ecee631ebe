"""Application settings with YAML configuration support."""

import logging
import os
from pathlib import Path
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
import yaml


logger = logging.getLogger(__name__)

APP_NAME = "assistant-widget"
CONFIG_ENV_VAR = "ASSISTANT_WIDGET_CONFIG"
BASE_URL_ENV_VAR = "ASSISTANT_WIDGET_BASE_URL"


def get_app_data_dir() -> Path:
    """Get the application data directory."""
    if os.name == "nt":
        base = os.getenv("APPDATA", os.path.expanduser("~"))
    else:
        base = os.getenv("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    path = Path(base) / APP_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path


class WidgetSettings(BaseModel):
    """Trigger and chat window geometry."""

    trigger_size: int = Field(default=56, ge=1, description="Trigger button size in pixels")
    margin: int = Field(default=20, ge=0, description="Default distance from the screen edge")
    fallback_x: float = Field(default=20, description="Position used when no viewport is known")
    fallback_y: float = Field(default=20, description="Position used when no viewport is known")
    position_key: str = Field(default="ai-chatbot-position", description="Storage key for the trigger position")
    chat_width: int = Field(default=400, description="Chat window width")
    chat_height: int = Field(default=600, description="Chat window height")
    theme: str = Field(default="light", description="UI theme (light/dark)")


class ChatSettings(BaseModel):
    """Chat endpoint and user-facing texts."""

    base_url: str = Field(default="http://localhost:3001", description="Chat service base URL")
    endpoint: str = Field(default="/api/ai-chat", description="Chat endpoint path")
    timeout: Optional[float] = Field(default=None, description="Request timeout in seconds (None = transport default)")
    apology_text: str = Field(
        default="抱歉，我现在无法回答您的问题。请稍后重试或联系管理员。",
        description="Assistant message shown when a request fails",
    )
    failure_notice: str = Field(default="发送失败，请稍后重试", description="Transient notification on failure")
    cleared_notice: str = Field(default="对话已清空", description="Confirmation after clearing")
    quick_questions: List[str] = Field(
        default=["如何创建任务", "如何管理地址", "如何设置分组"],
        description="Suggestions offered on an empty conversation",
    )


class AppConfig(BaseModel):
    """Application configuration."""

    model_config = ConfigDict(extra="ignore")

    user_id: Optional[str] = Field(default=None, description="User identifier sent with each request")
    log_level: str = Field(default="INFO", description="Root log level")

    widget: WidgetSettings = Field(default_factory=WidgetSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)


# Global config instance
_config: Optional[AppConfig] = None


def get_config_path() -> Path:
    """Get the configuration file path."""
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    # Check local config first, then app data
    local_config = Path("config.yaml")
    if local_config.exists():
        return local_config
    return get_app_data_dir() / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load app config from YAML file."""
    global _config

    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            _config = AppConfig(**data)
        except Exception as e:
            logger.warning("Could not load config from %s: %s", config_path, e)
            _config = AppConfig()
    else:
        _config = AppConfig()

    # Override with environment variables
    if os.getenv(BASE_URL_ENV_VAR):
        _config.chat.base_url = os.getenv(BASE_URL_ENV_VAR)

    return _config


def save_config(config: AppConfig, config_path: Optional[Path] = None) -> None:
    """Save config to YAML file."""
    if config_path is None:
        config_path = get_config_path()

    data = config.model_dump()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)


def get_app_config() -> AppConfig:
    """Get the global app config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next access reloads it."""
    global _config
    _config = None
