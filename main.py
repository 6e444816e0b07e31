"""
Life Expectancy Map - Main Entry Point

Loads both datasets before any window is created; a load failure is fatal.
"""
import logging
import sys

from PySide6 import QtWidgets

from app.desktop.main_window import MainWindow
from core.config import MapConfig
from core.data import load_map_data
from core.errors import LoadError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    config = MapConfig()

    logger.info("Loading data...")
    try:
        map_data = load_map_data(config)
    except LoadError as exc:
        logger.error("Cannot start: %s", exc)
        return 1
    logger.info("Data loaded.")

    app = QtWidgets.QApplication(sys.argv)
    window = MainWindow(map_data, config)
    window.show()

    logger.info("Controls: hover a country, drag to pan, scroll to zoom, 'r' to reset.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
