"""
Theme management and styling for the application.
"""
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import QWidget

from quillview.core.annotations.models import PopupStyle

from .models import ThemeColors


class ThemeManager:
    """Manages application themes and styling."""

    # Define color schemes
    DARK_THEME = ThemeColors(
        # Backgrounds
        bg_primary="#2e2e2e",
        bg_secondary="#3e3e3e",
        bg_tertiary="#4e4e4e",
        bg_viewer="#1f1f1f",

        # Text
        text_primary="#f0f0f0",
        text_secondary="#B5B5C5",
        text_muted="#8899AA",

        # Accent
        accent_primary="#4a9eff",
        accent_hover="#3a8eef",

        # Borders
        border_primary="#555555",
        border_secondary="#3e3e3e",

        # Annotation overlay
        annotation_primary="#ff3b30",
        annotation_secondary="#1e6fd9",
        popup_background="rgba(255, 255, 255, 242)",
        notice_background="rgba(20, 20, 20, 220)",
    )

    LIGHT_THEME = ThemeColors(
        # Backgrounds
        bg_primary="#f0f0f0",
        bg_secondary="#ffffff",
        bg_tertiary="#e0e0e0",
        bg_viewer="#d6d6d6",

        # Text
        text_primary="#2e2e2e",
        text_secondary="#7A899C",
        text_muted="#8899AA",

        # Accent
        accent_primary="#4a9eff",
        accent_hover="#3a8eef",

        # Borders
        border_primary="#cccccc",
        border_secondary="#e0e0e0",

        # Annotation overlay
        annotation_primary="#ff0000",
        annotation_secondary="#0050c8",
        popup_background="rgba(255, 255, 255, 242)",
        notice_background="rgba(40, 40, 40, 220)",
    )

    @classmethod
    def apply_theme(cls, widget: QWidget, dark_mode: bool) -> None:
        """
        Apply theme to a widget and its children.

        Args:
            widget: Widget to style
            dark_mode: Whether to use dark theme
        """
        theme = cls.get_theme_colors(dark_mode)
        widget.setStyleSheet(cls._generate_stylesheet(theme))

    @classmethod
    def _generate_stylesheet(cls, theme: ThemeColors) -> str:
        """
        Generate a complete stylesheet from theme colors.

        Args:
            theme: Theme colors to use

        Returns:
            Complete CSS stylesheet string
        """
        return f"""
            /* --- GENERAL STYLES --- */
            QMainWindow, QWidget, QLabel, QFrame {{
                background-color: {theme.bg_primary};
                color: {theme.text_primary};
                border: none;
            }}

            /* --- TOOL BUTTONS --- */
            QToolButton {{
                background-color: transparent;
                color: {theme.text_secondary};
                border: none;
                border-radius: 4px;
                padding: 4px 8px;
                font-weight: bold;
            }}
            QToolButton:hover {{
                background-color: {theme.bg_secondary};
            }}
            QToolButton:pressed {{
                background-color: {theme.bg_tertiary};
            }}
            QToolButton:disabled {{
                color: {theme.text_muted};
            }}

            /* --- LABELS --- */
            QLabel {{
                background-color: transparent;
            }}
            QLabel[objectName="statusLabel"] {{
                color: {theme.text_muted};
            }}

            /* --- DOCUMENT VIEW --- */
            QScrollArea, #PageContainer {{
                background-color: {theme.bg_viewer};
                border: none;
            }}
            #PageWidget {{
                background-color: white;
            }}
            #AnnotationOverlay {{
                background: transparent;
            }}

            QScrollBar:vertical, QScrollBar:horizontal {{
                background-color: {theme.bg_primary};
                border: none;
            }}
            QScrollBar:vertical {{
                width: 12px;
            }}
            QScrollBar:horizontal {{
                height: 12px;
            }}
            QScrollBar::handle {{
                background-color: {theme.bg_tertiary};
                border-radius: 6px;
                min-height: 20px;
                min-width: 20px;
            }}
            QScrollBar::add-line, QScrollBar::sub-line {{
                background: none;
                height: 0px;
                width: 0px;
            }}

            /* --- ANNOTATION POPUPS --- */
            #AnnotationPopup {{
                background-color: {theme.popup_background};
                border-radius: 4px;
                padding: 8px;
                font-size: 12px;
            }}
            #AnnotationPopup[popupStyle="primary"] {{
                color: {theme.annotation_primary};
                border: 2px solid {theme.annotation_primary};
            }}
            #AnnotationPopup[popupStyle="secondary"] {{
                color: {theme.annotation_secondary};
                border: 2px solid {theme.annotation_secondary};
            }}
            #AnnotationCounter {{
                background-color: rgba(255, 255, 255, 230);
                color: {theme.annotation_primary};
                border: 1px solid #cccccc;
                border-radius: 8px;
                padding: 4px 8px;
                font-size: 12px;
                font-weight: bold;
            }}
            #CopyNotice {{
                background-color: {theme.notice_background};
                color: white;
                border-radius: 8px;
                padding: 8px 16px;
            }}

            /* --- FRAMES --- */
            #TopFrame {{
                background-color: {theme.bg_primary};
                border-bottom: 1px solid {theme.border_secondary};
            }}

            /* --- THUMBNAILS --- */
            QListWidget {{
                background-color: {theme.bg_primary};
                color: {theme.text_primary};
                border: none;
                border-right: 1px solid {theme.border_secondary};
                outline: none;
            }}
            QListWidget::item {{
                padding: 6px;
                border: 2px solid transparent;
                border-radius: 4px;
            }}
            QListWidget::item:hover {{
                background-color: {theme.bg_secondary};
            }}
            QListWidget::item:selected {{
                background-color: {theme.bg_tertiary};
                border: 2px solid {theme.accent_primary};
                color: {theme.text_primary};
            }}

            /* --- MESSAGE BOX --- */
            QMessageBox {{
                background-color: {theme.bg_primary};
            }}
            QMessageBox QLabel {{
                color: {theme.text_primary};
            }}
        """

    @classmethod
    def get_theme_colors(cls, dark_mode: bool) -> ThemeColors:
        """
        Get theme colors for the current mode.

        Args:
            dark_mode: Whether to get dark theme colors

        Returns:
            ThemeColors object
        """
        return cls.DARK_THEME if dark_mode else cls.LIGHT_THEME

    @classmethod
    def get_annotation_color(cls, style: PopupStyle, dark_mode: bool) -> QColor:
        """
        Get the accent color for an overlay element.

        Args:
            style: Popup style of the annotation
            dark_mode: Whether using dark mode

        Returns:
            QColor for borders, text and strike lines
        """
        theme = cls.get_theme_colors(dark_mode)
        if style == PopupStyle.SECONDARY:
            return QColor(theme.annotation_secondary)
        return QColor(theme.annotation_primary)
