"""
Application entry point.
"""

import argparse
import logging
import sys
from typing import List, Optional

from PyQt5.QtWidgets import QApplication

from quillview import __version__
from quillview.utils import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="quillview",
        description="View a PDF with its annotations as draggable popups.",
    )
    parser.add_argument("path", nargs="?", help="PDF file to open")
    parser.add_argument("--debug", action="store_true", help="log debug output to the console")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to run the viewer.
    It opens the file passed as a command-line argument, if any.
    """
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(debug=args.debug)
    logger.info("Starting Quillview %s", __version__)

    # Imported after logging is configured so module loggers pick it up
    from quillview.ui.windows import MainWindow

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Quillview")

    window = MainWindow(args.path)
    window.showMaximized()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
