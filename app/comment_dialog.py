from __future__ import annotations

from typing import Callable, Optional

from PyQt6 import QtWidgets


class CommentDialog(QtWidgets.QDialog):
    def __init__(
        self,
        name: str = "",
        comment: str = "",
        tr: Optional[Callable[[str], str]] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._t = tr or (lambda key: key)
        self.setWindowTitle(self._t("comment_title"))
        self.resize(520, 320)

        layout = QtWidgets.QVBoxLayout(self)
        form = QtWidgets.QFormLayout()
        layout.addLayout(form)

        self.name_edit = QtWidgets.QLineEdit(name)
        self.comment_edit = QtWidgets.QPlainTextEdit()
        self.comment_edit.setPlainText(comment)

        form.addRow(self._t("table_name"), self.name_edit)
        form.addRow(self._t("table_comment"), self.comment_edit)

        buttons = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok
            | QtWidgets.QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        if not name:
            self.name_edit.setFocus()
        else:
            self.comment_edit.setFocus()

    def get_data(self) -> Optional[tuple[str, str]]:
        if self.exec() != QtWidgets.QDialog.DialogCode.Accepted:
            return None
        name = self.name_edit.text().strip()
        if not name:
            QtWidgets.QMessageBox.warning(self, self._t("missing_data"), self._t("name_required"))
            return None
        return name, self.comment_edit.toPlainText()
