"""Qt application bootstrap.

Sets up QApplication, loads configuration and launches the main window.
"""

import sys
import logging
from PySide6.QtWidgets import QApplication, QMessageBox

from popdash.config import load_typed_config
from popdash.providers import build_client
from popdash.services.population_service import PopulationService
from .controller import DashboardController
from .main_window import MainWindow

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Configure logging for the GUI."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def main() -> int:
    """Main entry point for GUI application.

    Returns:
        Exit code
    """
    app = QApplication(sys.argv)
    app.setApplicationName("Population Dashboard")
    app.setStyle("Fusion")

    try:
        config = load_typed_config().to_dict()
        setup_logging(config.get("log_level", "INFO"))
        logger.info("Starting Population Dashboard GUI...")

        service = PopulationService(build_client(config))
        window = MainWindow(config)
        controller = DashboardController(
            window.filter_store, service, window.table, window.geography_combo, window.year_combo, window
        )
        app.aboutToQuit.connect(controller.shutdown)
        window.show()
        controller.start()

        logger.info("GUI ready")
        return app.exec()

    except Exception as e:
        logger.exception("Failed to start GUI")
        QMessageBox.critical(None, "Startup Error", f"Failed to start application:\n\n{e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
