from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QPropertyAnimation, Qt, QTimer
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsOpacityEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from geostats.core.catalog import Language
from geostats.core.game import GameController
from geostats.core.session import DIFFICULTY_LIVES, FactRequest, ShowError, Status, Transition
from geostats.ui.colors import GameColors, blend_hex
from geostats.ui.models import leaderboard_rows
from geostats.ui.overlays import SuccessOverlay, primary_button_style
from geostats.ui.widgets import CoolBackground, GuessInput, HintChip, StatCard

ERROR_FEEDBACK_MS = 800

_STAT_ICONS = {"POPULATION": "👥", "HDI": "📊", "HOMICIDE": "⚠", "INDEPENDENCE": "📅"}
_LANGUAGE_FLAGS = {Language.PT: "🇧🇷", Language.EN: "🇺🇸"}


def _outline_button_style(color: str) -> str:
    return f"""
        QPushButton {{
            background: #171717;
            color: {color};
            border: 2px solid {blend_hex(color, '#000000', 0.25)};
            padding: 28px 16px;
            font-size: 20px;
            font-weight: 900;
            letter-spacing: 3px;
        }}
        QPushButton:hover {{
            background: {blend_hex('#171717', color, 0.2)};
            border-color: {color};
        }}
    """


def _link_button_style() -> str:
    return f"""
        QPushButton {{
            background: transparent;
            color: {GameColors.TEXT_MUTED};
            border: 1px solid #374151;
            padding: 10px 16px;
            font-family: monospace;
            font-size: 12px;
            letter-spacing: 2px;
        }}
        QPushButton:hover {{ color: white; border-color: white; }}
        QPushButton:disabled {{ color: #374151; border-color: #1f2937; }}
    """


class MainWindow(QMainWindow):
    """Main game window: menu, round, game-over and leaderboard screens.

    All game rules live in :class:`GameController`; the window forwards input
    to it and re-renders from the resulting session.
    """

    def __init__(self, controller: GameController) -> None:
        super().__init__()
        self._controller = controller
        self._feedback = "idle"

        self._stack: Optional[QStackedWidget] = None
        self._menu_screen: Optional[QWidget] = None
        self._game_screen: Optional[QWidget] = None
        self._gameover_screen: Optional[QWidget] = None
        self._leaderboard_screen: Optional[QWidget] = None

        self._stat_cards: dict[str, StatCard] = {}
        self._difficulty_buttons: dict[str, QPushButton] = {}
        self._hints_layout: Optional[QGridLayout] = None
        self._leaderboard_layout: Optional[QVBoxLayout] = None
        self._guess_input: Optional[GuessInput] = None
        self._success_overlay: Optional[SuccessOverlay] = None

        self._error_overlay: Optional[QWidget] = None
        self._error_overlay_effect: Optional[QGraphicsOpacityEffect] = None
        self._error_overlay_anim: Optional[QPropertyAnimation] = None

        self._build_ui()
        self._refresh()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        """Construct the widget tree: header, the four screens and overlays."""
        self.setWindowTitle("GeoStats")
        self.setMinimumSize(1000, 720)

        root = CoolBackground()
        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)
        root_layout.addWidget(self._build_header())

        self._stack = QStackedWidget()
        self._stack.setStyleSheet("background: transparent;")
        self._menu_screen = self._build_menu_screen()
        self._game_screen = self._build_game_screen()
        self._gameover_screen = self._build_gameover_screen()
        self._leaderboard_screen = self._build_leaderboard_screen()
        for screen in (self._menu_screen, self._game_screen, self._gameover_screen, self._leaderboard_screen):
            self._stack.addWidget(screen)
        root_layout.addWidget(self._stack, 1)
        self.setCentralWidget(root)

        self._success_overlay = SuccessOverlay(self._stack)
        self._success_overlay.next_requested.connect(self._next_round)
        self._success_overlay.hide()

        self._error_overlay = QWidget(self)
        self._error_overlay.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._error_overlay.setStyleSheet(f"background-color: {GameColors.PRIMARY};")
        self._error_overlay_effect = QGraphicsOpacityEffect(self._error_overlay)
        self._error_overlay_effect.setOpacity(0.0)
        self._error_overlay.setGraphicsEffect(self._error_overlay_effect)
        self._error_overlay.hide()
        self._error_overlay_anim = QPropertyAnimation(self._error_overlay_effect, b"opacity", self)
        self._error_overlay_anim.setDuration(ERROR_FEEDBACK_MS // 2)
        self._error_overlay_anim.setKeyValueAt(0.0, 0.0)
        self._error_overlay_anim.setKeyValueAt(0.2, 0.25)
        self._error_overlay_anim.setKeyValueAt(1.0, 0.0)
        self._error_overlay_anim.finished.connect(self._error_overlay.hide)

        self._advance_shortcuts = []
        for key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            shortcut = QShortcut(QKeySequence(key), self)
            shortcut.activated.connect(self._advance)
            self._advance_shortcuts.append(shortcut)

    def _build_header(self) -> QWidget:
        header = QFrame()
        header.setObjectName("header")
        header.setStyleSheet(
            "QFrame#header { background: rgba(0, 0, 0, 0.5); border-bottom: 1px solid rgba(255, 255, 255, 0.05); }"
        )
        row = QHBoxLayout(header)
        row.setContentsMargins(24, 14, 24, 14)
        row.setSpacing(16)

        logo = QLabel(f"GEO<span style='color:{GameColors.PRIMARY}'>STATS</span>")
        logo.setTextFormat(Qt.TextFormat.RichText)
        logo.setStyleSheet("color: white; font-size: 22px; font-weight: 900;")
        row.addWidget(logo)

        self._language_btn = QPushButton("")
        self._language_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._language_btn.setStyleSheet(_link_button_style())
        self._language_btn.clicked.connect(self._toggle_language)
        row.addWidget(self._language_btn)
        row.addStretch(1)

        self._lives_label = QLabel("")
        self._lives_label.setStyleSheet(f"color: {GameColors.PRIMARY_LIGHT}; font-size: 18px; font-weight: 700;")
        row.addWidget(self._lives_label)

        self._score_label = QLabel("")
        self._score_label.setStyleSheet("color: white; font-size: 18px; font-weight: 700;")
        row.addWidget(self._score_label)
        return header

    def _build_menu_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setContentsMargins(48, 48, 48, 48)
        layout.setSpacing(36)
        layout.addStretch(1)

        title = QLabel(f"GEO<span style='color:{GameColors.PRIMARY}'>STATS</span>")
        title.setTextFormat(Qt.TextFormat.RichText)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("color: white; font-size: 96px; font-weight: 900;")
        layout.addWidget(title)

        self._subtitle_label = QLabel("")
        self._subtitle_label.setAlignment(Qt.AlignCenter)
        self._subtitle_label.setStyleSheet("color: #fee2e2; font-size: 20px;")
        layout.addWidget(self._subtitle_label)

        buttons = QHBoxLayout()
        buttons.setSpacing(24)
        for difficulty, color in (("easy", GameColors.EASY), ("medium", GameColors.MEDIUM), ("hard", GameColors.HARD)):
            lives = DIFFICULTY_LIVES[difficulty]
            btn = QPushButton("")
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.setStyleSheet(_outline_button_style(color))
            btn.clicked.connect(lambda _checked=False, n=lives: self.start_game(n))
            buttons.addWidget(btn)
            self._difficulty_buttons[difficulty] = btn
        layout.addLayout(buttons)

        self._choose_label = QLabel("")
        self._choose_label.setAlignment(Qt.AlignCenter)
        self._choose_label.setStyleSheet(f"color: {GameColors.TEXT_MUTED}; font-size: 12px; letter-spacing: 2px;")
        layout.addWidget(self._choose_label)

        self._menu_leaderboard_btn = QPushButton("")
        self._menu_leaderboard_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._menu_leaderboard_btn.setStyleSheet(_link_button_style())
        self._menu_leaderboard_btn.clicked.connect(self._show_leaderboard)
        layout.addWidget(self._menu_leaderboard_btn, 0, Qt.AlignHCenter)
        layout.addStretch(1)
        return screen

    def _build_game_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setContentsMargins(48, 32, 48, 32)
        layout.setSpacing(28)

        self._mission_title = QLabel("")
        self._mission_title.setAlignment(Qt.AlignCenter)
        self._mission_title.setStyleSheet(
            f"color: {GameColors.PRIMARY_LIGHT}; font-size: 20px; font-weight: 900; letter-spacing: 4px;"
        )
        layout.addWidget(self._mission_title)

        self._mission_text = QLabel("")
        self._mission_text.setAlignment(Qt.AlignCenter)
        self._mission_text.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-size: 14px;")
        layout.addWidget(self._mission_text)

        stats_row = QHBoxLayout()
        stats_row.setSpacing(16)
        for key, icon in _STAT_ICONS.items():
            card = StatCard(icon)
            self._stat_cards[key] = card
            stats_row.addWidget(card)
        layout.addLayout(stats_row)

        hints_container = QWidget()
        self._hints_layout = QGridLayout(hints_container)
        self._hints_layout.setContentsMargins(0, 0, 0, 0)
        self._hints_layout.setSpacing(12)
        layout.addWidget(hints_container)

        self._hint_btn = QPushButton("")
        self._hint_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._hint_btn.setStyleSheet(_link_button_style())
        self._hint_btn.clicked.connect(self._request_hint)
        layout.addWidget(self._hint_btn, 0, Qt.AlignHCenter)

        self._guess_input = GuessInput()
        self._guess_input.setMaximumWidth(520)
        self._guess_input.guess_submitted.connect(self._submit_guess)
        layout.addWidget(self._guess_input, 0, Qt.AlignHCenter)

        layout.addStretch(1)
        self._source_label = QLabel("")
        self._source_label.setAlignment(Qt.AlignCenter)
        self._source_label.setStyleSheet("color: #4b5563; font-size: 10px; letter-spacing: 1px;")
        layout.addWidget(self._source_label)
        return screen

    def _build_gameover_screen(self) -> QWidget:
        screen = QWidget()
        outer = QVBoxLayout(screen)
        outer.setContentsMargins(48, 48, 48, 48)

        card = QFrame()
        card.setObjectName("gameoverCard")
        card.setMaximumWidth(560)
        card.setStyleSheet(
            f"QFrame#gameoverCard {{ background: rgba(23, 23, 23, 0.8); border: 1px solid {GameColors.PRIMARY_DARK}; }}"
        )
        layout = QVBoxLayout(card)
        layout.setContentsMargins(40, 36, 40, 36)
        layout.setSpacing(20)

        self._gameover_title = QLabel("")
        self._gameover_title.setAlignment(Qt.AlignCenter)
        self._gameover_title.setStyleSheet("color: white; font-size: 44px; font-weight: 900; border: none;")
        layout.addWidget(self._gameover_title)

        self._final_score_caption = QLabel("")
        self._final_score_caption.setAlignment(Qt.AlignCenter)
        self._final_score_caption.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; letter-spacing: 2px; border: none;")
        layout.addWidget(self._final_score_caption)

        self._final_score_value = QLabel("")
        self._final_score_value.setAlignment(Qt.AlignCenter)
        self._final_score_value.setStyleSheet(
            f"color: {GameColors.PRIMARY}; font-size: 64px; font-weight: 700; font-family: monospace; border: none;"
        )
        layout.addWidget(self._final_score_value)

        self._country_was_box = QFrame()
        self._country_was_box.setObjectName("countryWas")
        self._country_was_box.setStyleSheet(
            f"QFrame#countryWas {{ background: rgba(0, 0, 0, 0.4); border: none; border-left: 4px solid {GameColors.PRIMARY}; }}"
        )
        box_layout = QVBoxLayout(self._country_was_box)
        box_layout.setContentsMargins(20, 16, 20, 16)
        self._country_was_caption = QLabel("")
        self._country_was_caption.setAlignment(Qt.AlignCenter)
        self._country_was_caption.setStyleSheet(f"color: {GameColors.TEXT_MUTED}; font-size: 12px; border: none;")
        box_layout.addWidget(self._country_was_caption)
        self._country_was_name = QLabel("")
        self._country_was_name.setAlignment(Qt.AlignCenter)
        self._country_was_name.setStyleSheet("color: white; font-size: 32px; font-weight: 700; border: none;")
        box_layout.addWidget(self._country_was_name)
        layout.addWidget(self._country_was_box)

        self._try_again_btn = QPushButton("")
        self._try_again_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._try_again_btn.setStyleSheet(primary_button_style())
        self._try_again_btn.clicked.connect(self._restart)
        layout.addWidget(self._try_again_btn)

        links = QHBoxLayout()
        self._gameover_ranking_btn = QPushButton("")
        self._gameover_ranking_btn.setStyleSheet(_link_button_style())
        self._gameover_ranking_btn.clicked.connect(self._show_leaderboard)
        links.addWidget(self._gameover_ranking_btn)
        self._gameover_menu_btn = QPushButton("")
        self._gameover_menu_btn.setStyleSheet(_link_button_style())
        self._gameover_menu_btn.clicked.connect(self._back_to_menu)
        links.addWidget(self._gameover_menu_btn)
        layout.addLayout(links)

        outer.addWidget(card, 0, Qt.AlignCenter)
        return screen

    def _build_leaderboard_screen(self) -> QWidget:
        screen = QWidget()
        outer = QVBoxLayout(screen)
        outer.setContentsMargins(48, 48, 48, 48)

        card = QFrame()
        card.setObjectName("leaderboardCard")
        card.setMinimumWidth(560)
        card.setMaximumWidth(680)
        card.setStyleSheet("QFrame#leaderboardCard { background: #171717; border: 2px solid #1f2937; }")
        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(20)

        self._leaderboard_title = QLabel("")
        self._leaderboard_title.setAlignment(Qt.AlignCenter)
        self._leaderboard_title.setStyleSheet("color: white; font-size: 28px; font-weight: 900; border: none;")
        layout.addWidget(self._leaderboard_title)

        rows = QWidget()
        self._leaderboard_layout = QVBoxLayout(rows)
        self._leaderboard_layout.setContentsMargins(0, 0, 0, 0)
        self._leaderboard_layout.setSpacing(4)
        layout.addWidget(rows)

        self._leaderboard_back_btn = QPushButton("")
        self._leaderboard_back_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._leaderboard_back_btn.setStyleSheet(primary_button_style())
        self._leaderboard_back_btn.clicked.connect(self._back_to_menu)
        layout.addWidget(self._leaderboard_back_btn)

        outer.addWidget(card, 0, Qt.AlignCenter)
        return screen

    # ------------------------------------------------------------------
    # Input handlers
    # ------------------------------------------------------------------

    def start_game(self, lives: int) -> None:
        self._apply(self._controller.start(lives), new_round=True)

    def _restart(self) -> None:
        self.start_game(self._controller.session.max_lives)

    def _submit_guess(self, name: str) -> None:
        self._apply(self._controller.submit_guess(name))

    def _request_hint(self) -> None:
        self._apply(self._controller.request_hint())

    def _next_round(self) -> None:
        self._apply(self._controller.next_round(), new_round=True)

    def _advance(self) -> None:
        self._apply(self._controller.advance(), new_round=True)

    def _toggle_language(self) -> None:
        self._apply(self._controller.toggle_language())

    def _show_leaderboard(self) -> None:
        self._apply(self._controller.show_leaderboard())

    def _back_to_menu(self) -> None:
        self._apply(self._controller.back_to_menu())

    def on_fact_ready(self, request: FactRequest, text: str) -> None:
        """Receive a fetched fun fact on the UI thread."""
        if self._controller.fact_ready(request, text):
            self._refresh()

    def _apply(self, transition: Transition, *, new_round: bool = False) -> None:
        status = transition.session.status
        if any(isinstance(effect, ShowError) for effect in transition.effects):
            self._feedback = "error"
            self._flash_error_overlay()
            if status is Status.PLAYING:
                QTimer.singleShot(ERROR_FEEDBACK_MS, self._reset_feedback)
        elif status is Status.SUCCESS:
            self._feedback = "success"
        elif new_round or status is not Status.PLAYING:
            self._feedback = "idle"
        if new_round:
            self._guess_input.clear()
        self._refresh()

    def _reset_feedback(self) -> None:
        if self._feedback == "error":
            self._feedback = "idle"
            self._refresh()

    def _flash_error_overlay(self) -> None:
        """Flash a short red overlay on a wrong guess."""
        if not self._error_overlay or not self._error_overlay_effect or not self._error_overlay_anim:
            return
        self._error_overlay_anim.stop()
        self._error_overlay.setGeometry(self.rect())
        self._error_overlay.show()
        self._error_overlay.raise_()
        self._error_overlay_effect.setOpacity(0.0)
        self._error_overlay_anim.start()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        session = self._controller.session
        t = self._controller.text
        status = session.status

        self._language_btn.setText(f"{_LANGUAGE_FLAGS[session.language]}  {t('language_toggle')}")
        in_round = status in (Status.PLAYING, Status.SUCCESS)
        self._lives_label.setVisible(in_round)
        self._score_label.setVisible(in_round)
        self._lives_label.setText(f"❤️ {session.lives}")
        self._score_label.setText(f"★ {session.score}")

        for shortcut in self._advance_shortcuts:
            shortcut.setEnabled(status in (Status.SUCCESS, Status.GAMEOVER, Status.LEADERBOARD))

        if status is Status.MENU:
            self._render_menu()
            self._stack.setCurrentWidget(self._menu_screen)
        elif status is Status.LEADERBOARD:
            self._render_leaderboard()
            self._stack.setCurrentWidget(self._leaderboard_screen)
        elif status is Status.GAMEOVER:
            self._render_gameover()
            self._stack.setCurrentWidget(self._gameover_screen)
        else:
            self._render_game()
            self._stack.setCurrentWidget(self._game_screen)

        self._render_success_overlay()

    def _render_menu(self) -> None:
        t = self._controller.text
        self._subtitle_label.setText(t("subtitle"))
        for difficulty, btn in self._difficulty_buttons.items():
            btn.setText(f"{t(difficulty).upper()}\n{DIFFICULTY_LIVES[difficulty]} {t('lives')}")
        self._choose_label.setText(t("choose_difficulty").upper())
        self._menu_leaderboard_btn.setText(t("leaderboard_button").upper())

    def _render_game(self) -> None:
        session = self._controller.session
        t = self._controller.text
        self._mission_title.setText(t("mission_title").upper())
        self._mission_text.setText(t("mission_text"))
        self._source_label.setText(t("source").upper())

        for stat in self._controller.statistics():
            self._stat_cards[stat.key].set_content(stat.label, stat.value)

        while self._hints_layout.count():
            item = self._hints_layout.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
                w.deleteLater()
        for idx, hint in enumerate(session.hints_revealed):
            self._hints_layout.addWidget(HintChip(hint), 0, idx)

        self._hint_btn.setText(f"💡 {t('hint_button')}")
        self._hint_btn.setEnabled(session.can_hint)

        self._guess_input.set_names(self._controller.country_names())
        self._guess_input.set_texts(t("placeholder"), t("wait"))
        self._guess_input.set_feedback(self._feedback)
        self._guess_input.set_input_enabled(session.status is Status.PLAYING)

    def _render_success_overlay(self) -> None:
        session = self._controller.session
        if session.status is not Status.SUCCESS or session.current_country is None:
            self._success_overlay.hide()
            return
        t = self._controller.text
        self._success_overlay.set_round(
            session.current_country.flag, session.current_name, t("success"), t("next_challenge")
        )
        self._success_overlay.set_fact(session.fact, t("loading_fact"))
        self._success_overlay.setGeometry(self._stack.rect())
        self._success_overlay.raise_()
        self._success_overlay.show()

    def _render_gameover(self) -> None:
        session = self._controller.session
        t = self._controller.text
        self._gameover_title.setText(t("game_over").upper())
        self._final_score_caption.setText(t("final_score").upper())
        self._final_score_value.setText(str(session.score))
        country = session.current_country
        self._country_was_box.setVisible(country is not None)
        if country is not None:
            self._country_was_caption.setText(t("country_was").upper())
            self._country_was_name.setText(f"{country.flag}  {session.current_name.upper()}")
        self._try_again_btn.setText(t("try_again").upper())
        self._gameover_ranking_btn.setText(t("view_ranking").upper())
        self._gameover_menu_btn.setText(t("back_menu").upper())

    def _render_leaderboard(self) -> None:
        t = self._controller.text
        self._leaderboard_title.setText(f"🏆 {t('leaderboard_title').upper()}")
        self._leaderboard_back_btn.setText(t("back").upper())

        while self._leaderboard_layout.count():
            item = self._leaderboard_layout.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
                w.deleteLater()

        self._leaderboard_layout.addWidget(self._leaderboard_line(t("pos"), t("agent"), t("points"), header=True))
        for row in leaderboard_rows(self._controller.leaderboard()):
            name = row.entry.name.upper()
            if row.highlighted:
                name = f"{name}  [{t('you').upper()}]"
            self._leaderboard_layout.addWidget(
                self._leaderboard_line(row.position, name, str(row.entry.score), highlighted=row.highlighted)
            )

    def _leaderboard_line(
        self, position: str, name: str, score: str, *, header: bool = False, highlighted: bool = False
    ) -> QWidget:
        line = QFrame()
        line.setObjectName("leaderboardLine")
        background = "rgba(127, 29, 29, 0.25)" if highlighted else "transparent"
        line.setStyleSheet(
            f"QFrame#leaderboardLine {{ background: {background}; border: none; border-bottom: 1px solid #1f2937; }}"
        )
        row = QHBoxLayout(line)
        row.setContentsMargins(8, 8, 8, 8)
        color = GameColors.TEXT_MUTED if header else ("white" if highlighted else GameColors.TEXT_SECONDARY)
        size = 11 if header else 15
        columns = (
            (position, 2, Qt.AlignLeft, color),
            (name, 7, Qt.AlignLeft, color),
            (score, 3, Qt.AlignRight, color if header else GameColors.GOLD),
        )
        for text, stretch, align, label_color in columns:
            label = QLabel(text)
            label.setAlignment(align | Qt.AlignVCenter)
            label.setStyleSheet(f"color: {label_color}; font-size: {size}px; font-weight: 700; border: none;")
            row.addWidget(label, stretch)
        return line
