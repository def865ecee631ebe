"""Stylesheets for the trigger and chat window, per theme."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    """Theme colors."""

    window_bg: str
    messages_bg: str
    bubble_bg: str
    bubble_border: str
    text_primary: str
    text_muted: str
    input_bg: str
    trigger_bg: str


LIGHT = Palette(
    window_bg="#ffffff",
    messages_bg="#fafafa",
    bubble_bg="#ffffff",
    bubble_border="#f0f0f0",
    text_primary="#333333",
    text_muted="#8c8c8c",
    input_bg="#fafafa",
    trigger_bg="rgba(24, 144, 255, 204)",
)

DARK = Palette(
    window_bg="#1f1f1f",
    messages_bg="#141414",
    bubble_bg="#262626",
    bubble_border="#434343",
    text_primary="#ffffff",
    text_muted="#8c8c8c",
    input_bg="#262626",
    trigger_bg="rgba(42, 42, 42, 204)",
)


class Styles:
    """UI stylesheet builders."""

    # Colors shared by both themes
    ACCENT_BLUE = "#1890ff"
    ACCENT_GREEN = "#52c41a"
    ACCENT_RED = "#ff4d4f"

    @staticmethod
    def palette(theme: str) -> Palette:
        return DARK if theme == "dark" else LIGHT

    @classmethod
    def trigger(cls, theme: str, size: int, dragging: bool = False) -> str:
        p = cls.palette(theme)
        border = "rgba(255, 255, 255, 0.5)" if dragging else "rgba(255, 255, 255, 0.2)"
        return f"""
            QPushButton {{
                background-color: {p.trigger_bg};
                color: white;
                border-radius: {size // 2}px;
                font-size: {size // 2}px;
                border: 1px solid {border};
            }}
        """

    @classmethod
    def badge(cls) -> str:
        return f"""
            QLabel {{
                background-color: {cls.ACCENT_GREEN};
                color: white;
                border-radius: 8px;
                font-size: 10px;
                padding: 0px 4px;
            }}
        """

    @classmethod
    def window(cls, theme: str) -> str:
        p = cls.palette(theme)
        return f"""
            QWidget {{
                background-color: {p.window_bg};
                color: {p.text_primary};
            }}
        """

    @classmethod
    def messages_area(cls, theme: str) -> str:
        p = cls.palette(theme)
        return f"""
            QScrollArea, QScrollArea > QWidget > QWidget {{
                border: none;
                background-color: {p.messages_bg};
            }}
        """

    @classmethod
    def message(cls, theme: str, is_user: bool, is_error: bool = False) -> str:
        p = cls.palette(theme)
        if is_user:
            bg, color, border = cls.ACCENT_BLUE, "#ffffff", "none"
        else:
            bg, color, border = p.bubble_bg, p.text_primary, f"1px solid {p.bubble_border}"
        if is_error:
            color = cls.ACCENT_RED
        return f"""
            QLabel {{
                background-color: {bg};
                color: {color};
                border: {border};
                border-radius: 10px;
                padding: 10px;
                font-size: 13px;
            }}
        """

    @classmethod
    def muted_label(cls, theme: str) -> str:
        return f"QLabel {{ color: {cls.palette(theme).text_muted}; background: transparent; font-size: 11px; }}"

    @classmethod
    def text_input(cls, theme: str) -> str:
        p = cls.palette(theme)
        return f"""
            QTextEdit {{
                background-color: {p.input_bg};
                color: {p.text_primary};
                border: 1px solid {p.bubble_border};
                border-radius: 8px;
                padding: 8px;
                font-size: 13px;
            }}
            QTextEdit:focus {{
                border-color: {cls.ACCENT_BLUE};
            }}
        """

    SEND_BUTTON = f"""
        QPushButton {{
            background-color: {ACCENT_BLUE};
            color: white;
            border: none;
            border-radius: 20px;
            font-size: 18px;
        }}
        QPushButton:disabled {{
            background-color: #444444;
            color: #888888;
        }}
    """

    ICON_BUTTON = """
        QPushButton {
            background-color: transparent;
            border: none;
            border-radius: 5px;
            font-size: 16px;
            padding: 0px;
        }
        QPushButton:hover {
            background-color: rgba(128, 128, 128, 0.2);
        }
    """

    QUICK_QUESTION = f"""
        QPushButton {{
            background-color: transparent;
            border: 1px dashed #d9d9d9;
            border-radius: 4px;
            padding: 2px 8px;
            font-size: 12px;
        }}
        QPushButton:hover {{
            border-color: {ACCENT_BLUE};
            color: {ACCENT_BLUE};
        }}
    """
