"""
Application Initialization
==========================
This module builds the demo window and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the root of the demo application. It:
1. Configures logging.
2. Creates the QApplication.
3. Shows the MainWindow, whose widgets are placed by layout formulas.
"""
import logging
import sys

from PySide6.QtWidgets import QApplication

from scalablelayout.config import APP_NAME
from scalablelayout.logging_config import setup_logging
from scalablelayout.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    # Pass trace_formulas=True with logging.DEBUG to see every parse and cell placement
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    # 3. Initialize the Main Window
    window = MainWindow()
    window.show()
    logger.info("Demo window shown.")

    # 4. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
