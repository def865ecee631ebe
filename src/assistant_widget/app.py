"""Main application entry point for the assistant widget."""

import logging
import sys
from typing import Optional

from PyQt6.QtWidgets import QApplication

from .config import AppConfig, get_app_config
from .core import WidgetController
from .services import ChatClient
from .storage.qsettings import QSettingsStore


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


class Application:
    """Wires config, storage, chat client, controller and UI together."""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or get_app_config()
        self.client = ChatClient.from_settings(self.config.chat)
        self.store = QSettingsStore()
        self.controller: Optional[WidgetController] = None
        self.widget = None  # Will be set after UI import
        self.qt_app: Optional[QApplication] = None

    def current_user_id(self) -> Optional[str]:
        return self.config.user_id

    def current_theme(self) -> str:
        return self.config.widget.theme

    def run(self) -> int:
        """Run the application."""
        self.qt_app = QApplication(sys.argv)
        self.qt_app.setQuitOnLastWindowClosed(False)

        # Import UI here, after QApplication exists
        from .ui import FloatingWidget, QtRunner, screen_viewport

        self.controller = WidgetController(
            store=self.store,
            client=self.client,
            widget_settings=self.config.widget,
            chat_settings=self.config.chat,
            viewport=screen_viewport(),
            user_id_provider=self.current_user_id,
            runner=QtRunner(self.qt_app),
        )
        logger.info("Assistant widget started (session %s, endpoint %s)",
                    self.controller.session_id, self.client.url)

        self.widget = FloatingWidget(self.controller, theme_provider=self.current_theme)
        self.widget.show()

        try:
            return self.qt_app.exec()
        finally:
            self.controller.teardown()
            self.client.close()


def main():
    """Main entry point."""
    config = get_app_config()
    configure_logging(config.log_level)
    app = Application(config)
    sys.exit(app.run())


if __name__ == "__main__":
    main()
