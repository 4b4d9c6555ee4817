from __future__ import annotations

import logging
import sys
from pathlib import Path

from PyQt6 import QtWidgets

from app.editor_window import APP_NAME, APP_VERSION, EditorWindow


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main() -> int:
    if sys.platform == "win32":
        try:
            import ctypes

            ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID("DescriptIonEditor")
        except Exception:
            logging.exception("Failed to set Windows AppUserModelID")
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    args = app.arguments()[1:]
    folder = Path(args[0]) if args and Path(args[0]).is_dir() else None
    window = EditorWindow(folder)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
