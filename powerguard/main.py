#!/usr/bin/env python3
"""
Main entrypoint for the PowerGuard desktop application.
"""
import sys
from PyQt5.QtWidgets import QApplication
from .db import ensure_db_exists
from .ui.main_window import MainWindow


def main() -> int:
    # Ensure the key-value table exists before the UI reads from it
    ensure_db_exists()

    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
