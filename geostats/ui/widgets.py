"""Game screen widgets: background, stat cards, hint chips and the guess input."""

from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import QEvent, QPoint, Qt, Signal
from PySide6.QtGui import QColor, QLinearGradient, QPainter, QRadialGradient
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from geostats.core.matching import resolve_guess, suggestions
from geostats.ui.colors import GameColors, blend_hex


class CoolBackground(QWidget):
    """Dark gradient background with a soft red glow."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        gradient = QLinearGradient(0, 0, self.width(), self.height())
        gradient.setColorAt(0.0, QColor(GameColors.BG_TOP))
        gradient.setColorAt(0.5, QColor(GameColors.BG_MIDDLE))
        gradient.setColorAt(1.0, QColor(GameColors.BG_BOTTOM))
        painter.fillRect(self.rect(), gradient)

        painter.setPen(Qt.NoPen)
        radius = max(self.width(), self.height()) // 2
        glow = QRadialGradient(self.width() * 0.5, self.height() * 0.5, radius)
        glow.setColorAt(0, QColor(220, 38, 38, 28))
        glow.setColorAt(1, QColor(220, 38, 38, 0))
        painter.setBrush(glow)
        painter.drawEllipse(QPoint(self.width() // 2, self.height() // 2), radius, radius)


class StatCard(QFrame):
    """Card showing one country statistic."""

    def __init__(self, icon: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("statCard")
        self.setStyleSheet(
            f"""
            QFrame#statCard {{
                background: {GameColors.CARD_BG};
                border-left: 4px solid {GameColors.PRIMARY};
                border-radius: 2px;
            }}
            QFrame#statCard:hover {{ background: {GameColors.CARD_BG_HOVER}; }}
            """
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(24)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(0, 0, 0, 160))
        self.setGraphicsEffect(shadow)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 18, 18, 18)
        layout.setSpacing(10)

        icon_label = QLabel(icon)
        icon_label.setAlignment(Qt.AlignCenter)
        icon_label.setFixedSize(44, 44)
        icon_label.setStyleSheet(
            f"background: {GameColors.PRIMARY}; color: white; font-size: 20px;"
        )
        layout.addWidget(icon_label, 0, Qt.AlignHCenter)

        self._label = QLabel("")
        self._label.setAlignment(Qt.AlignCenter)
        self._label.setStyleSheet(
            f"color: {GameColors.TEXT_SECONDARY}; font-size: 11px; font-weight: 700; letter-spacing: 2px;"
        )
        layout.addWidget(self._label)

        self._value = QLabel("")
        self._value.setAlignment(Qt.AlignCenter)
        self._value.setWordWrap(True)
        self._value.setStyleSheet(
            f"color: {GameColors.TEXT_PRIMARY}; font-size: 24px; font-weight: 900; font-family: monospace;"
        )
        layout.addWidget(self._value)

    def set_content(self, label: str, value: str) -> None:
        self._label.setText(label.upper())
        self._value.setText(value)


class HintChip(QLabel):
    """Revealed hint text."""

    def __init__(self, text: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(f"ℹ️  {text}", parent)
        self.setAlignment(Qt.AlignCenter)
        self.setWordWrap(True)
        self.setStyleSheet(
            f"""
            QLabel {{
                background: rgba(23, 37, 84, 0.45);
                border: 1px solid rgba(59, 130, 246, 0.35);
                color: #bfdbfe;
                padding: 10px;
                font-family: monospace;
                font-size: 12px;
            }}
            """
        )


class GuessInput(QWidget):
    """Text input with live country suggestions.

    Enter submits the exact (accent/case-insensitive) match, or the only
    remaining suggestion when the typed text narrows the list to one name.
    """

    guess_submitted = Signal(str)

    _FEEDBACK_BORDER = {
        "idle": GameColors.PRIMARY_DARK,
        "success": GameColors.SUCCESS,
        "error": GameColors.PRIMARY,
    }

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._names: List[str] = []
        self._feedback = "idle"
        self._placeholder = ""
        self._wait_text = ""

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self._edit = QLineEdit()
        self._edit.setMinimumHeight(52)
        self._edit.textChanged.connect(self._on_text_changed)
        self._edit.returnPressed.connect(self._on_return)
        self._edit.installEventFilter(self)
        layout.addWidget(self._edit)

        self._list = QListWidget()
        self._list.setMaximumHeight(220)
        self._list.setStyleSheet(
            f"""
            QListWidget {{
                background: #171717;
                border: 1px solid {GameColors.PRIMARY_DARK};
                color: white;
                font-weight: 700;
            }}
            QListWidget::item {{ padding: 8px 18px; }}
            QListWidget::item:hover, QListWidget::item:selected {{ background: {GameColors.HARD}; }}
            """
        )
        self._list.itemClicked.connect(self._on_item_clicked)
        self._list.hide()
        layout.addWidget(self._list)

        self._apply_style()

    def set_names(self, names: List[str]) -> None:
        self._names = list(names)
        self._on_text_changed(self._edit.text())

    def set_texts(self, placeholder: str, wait_text: str) -> None:
        self._placeholder = placeholder
        self._wait_text = wait_text
        self._update_placeholder()

    def set_feedback(self, feedback: str) -> None:
        self._feedback = feedback
        if feedback != "idle":
            self._list.hide()
        self._apply_style()

    def set_input_enabled(self, enabled: bool) -> None:
        self._edit.setEnabled(enabled)
        self._update_placeholder()
        if enabled:
            self._edit.setFocus()

    def clear(self) -> None:
        self._edit.clear()
        self._list.hide()

    def eventFilter(self, obj, event) -> bool:
        if obj is self._edit and event.type() == QEvent.Type.KeyPress and event.key() == Qt.Key.Key_Escape:
            self._list.hide()
            return True
        return super().eventFilter(obj, event)

    def _update_placeholder(self) -> None:
        self._edit.setPlaceholderText(self._placeholder if self._edit.isEnabled() else self._wait_text)

    def _apply_style(self) -> None:
        border = self._FEEDBACK_BORDER.get(self._feedback, GameColors.PRIMARY_DARK)
        background = blend_hex("#000000", border, 0.12)
        self._edit.setStyleSheet(
            f"""
            QLineEdit {{
                background: {background};
                border: 2px solid {border};
                color: white;
                padding: 0 20px;
                font-size: 18px;
                font-family: monospace;
                letter-spacing: 1px;
            }}
            QLineEdit:disabled {{ color: {GameColors.TEXT_MUTED}; }}
            """
        )

    def _on_text_changed(self, text: str) -> None:
        self._list.clear()
        matches = suggestions(text, self._names)
        if not matches or self._feedback != "idle":
            self._list.hide()
            return
        for name in matches:
            self._list.addItem(QListWidgetItem(name))
        self._list.show()

    def _on_return(self) -> None:
        name = resolve_guess(self._edit.text(), self._names)
        if name is not None:
            self._submit(name)

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        self._submit(item.text())

    def _submit(self, name: str) -> None:
        self.clear()
        self.guess_submitted.emit(name)
