"""Application entry point and setup for the GeoStats guessing game."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from geostats.config import Settings
from geostats.core.catalog import CountryCatalog, Language
from geostats.core.facts import FactService
from geostats.core.game import GameController
from geostats.core.progress import ScoreStore
from geostats.core.translations import TranslationTable
from geostats.ui.fact_worker import FactDispatcher
from geostats.ui.main_window import MainWindow


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="geostats", description="Guess the country from its statistics.")
    parser.add_argument("--language", choices=[lang.value for lang in Language], help="initial display language")
    parser.add_argument("--lives", type=int, help="start a game right away with this many lives")
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, WARNING...)")
    return parser.parse_args(argv)


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Initialize the application, load resources, and start the main window."""
    args = parse_args(argv)
    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    app = QApplication(sys.argv[:1])
    app.setApplicationName("GeoStats")
    app.setApplicationDisplayName("GeoStats")

    catalog = CountryCatalog()
    translations = TranslationTable()
    store = ScoreStore(settings.progress_file)
    facts = FactService(settings.api_key, model=settings.model, timeout=settings.fact_timeout)
    language = Language(args.language) if args.language else settings.language
    logging.info("Loaded %d countries", len(catalog))

    # The dispatcher needs the window's result handler and the controller needs
    # the dispatcher's launcher, so the launcher is bound late.
    dispatcher: Optional[FactDispatcher] = None

    def launch_fact(request) -> None:
        if dispatcher is not None:
            dispatcher.launch(request)

    controller = GameController(catalog, translations, store, launch_fact, language=language)
    window = MainWindow(controller)
    dispatcher = FactDispatcher(facts, window.on_fact_ready, parent=window)

    if args.lives is not None and args.lives > 0:
        window.start_game(args.lives)

    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        window.setGeometry(screen.availableGeometry())
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
