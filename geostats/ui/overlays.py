"""In-window overlay shown after a correct guess."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from geostats.ui.colors import GameColors


def _themed_card_container(object_name: str, border: str) -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(420)
    container.setMaximumWidth(560)
    container.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: #171717;
            border: 4px solid {border};
        }}
        """
    )
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(50)
    shadow.setOffset(0, 0)
    shadow.setColor(QColor(34, 197, 94, 50))
    container.setGraphicsEffect(shadow)
    return container


def _overlay_background(parent: QWidget) -> QWidget:
    overlay_bg = QWidget(parent)
    overlay_bg.setObjectName("overlayBackground")
    overlay_bg.setStyleSheet("background: rgba(5, 46, 22, 0.9);")
    overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
    overlay_bg.setMinimumSize(1, 1)
    return overlay_bg


def primary_button_style() -> str:
    return """
        QPushButton {
            background: #ffffff;
            color: #000000;
            padding: 16px;
            border: none;
            font-weight: 900;
            font-size: 16px;
            letter-spacing: 2px;
        }
        QPushButton:hover { background: #e5e7eb; }
    """


class SuccessOverlay(QWidget):
    """Flag, country name and the fun fact (or a loading line until it arrives)."""

    next_requested = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        main_layout = QGridLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.setRowStretch(0, 1)
        main_layout.setColumnStretch(0, 1)

        # Clicking outside the card does not dismiss it; the round only advances explicitly.
        overlay_bg = _overlay_background(self)
        main_layout.addWidget(overlay_bg, 0, 0)

        container = _themed_card_container("successContainer", GameColors.SUCCESS)
        content = QVBoxLayout(container)
        content.setContentsMargins(36, 32, 36, 32)
        content.setSpacing(22)

        self._flag = QLabel("")
        self._flag.setAlignment(Qt.AlignCenter)
        self._flag.setStyleSheet("font-size: 96px; border: none;")
        content.addWidget(self._flag)

        self._title = QLabel("")
        self._title.setAlignment(Qt.AlignCenter)
        self._title.setStyleSheet("color: white; font-size: 32px; font-weight: 900; border: none;")
        content.addWidget(self._title)

        self._name = QLabel("")
        self._name.setAlignment(Qt.AlignCenter)
        self._name.setStyleSheet(
            f"color: {GameColors.SUCCESS}; font-size: 22px; font-family: monospace; border: none;"
        )
        content.addWidget(self._name)

        self._fact = QLabel("")
        self._fact.setWordWrap(True)
        self._fact.setMinimumHeight(60)
        content.addWidget(self._fact)

        self._next_btn = QPushButton("")
        self._next_btn.setStyleSheet(primary_button_style())
        self._next_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._next_btn.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self._next_btn.clicked.connect(self.next_requested.emit)
        content.addWidget(self._next_btn)

        main_layout.addWidget(container, 0, 0, 1, 1, Qt.AlignCenter)

    def set_round(self, flag: str, name: str, title: str, next_text: str) -> None:
        self._flag.setText(flag)
        self._title.setText(title.upper())
        self._name.setText(name.upper())
        self._next_btn.setText(next_text.upper())

    def set_fact(self, fact: Optional[str], loading_text: str) -> None:
        """Show *fact*; None means the fetch is still running. An empty fact hides the area."""
        if fact is None:
            self._fact.setText(f"●  {loading_text}")
            self._fact.setStyleSheet(f"color: {GameColors.TEXT_MUTED}; font-size: 13px; border: none;")
            self._fact.show()
        elif fact:
            self._fact.setText(f"“{fact}”")
            self._fact.setStyleSheet(
                f"""
                color: #d1d5db;
                font-style: italic;
                background: rgba(0, 0, 0, 0.5);
                border: none;
                border-left: 2px solid {GameColors.SUCCESS};
                padding: 16px;
                """
            )
            self._fact.show()
        else:
            self._fact.hide()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._update_geometry()

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._update_geometry()
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._update_geometry()
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)

    def _update_geometry(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
