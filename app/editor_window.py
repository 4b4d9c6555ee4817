from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from app.comment_dialog import CommentDialog
from models.config import DescriptionConfig
from models.description import CommentFormat
from storage.description_io import DescriptionStore
from storage.export_io import export_comments_json, export_comments_yaml


logger = logging.getLogger(__name__)

APP_NAME = "DescriptIon Editor"
APP_VERSION = "0.2.0"
MAX_RECENT_FOLDERS = 10

TRANSLATIONS = {
    "English": {
        "app_title": "descript.ion Comment Editor",
        "file": "File",
        "edit": "Edit",
        "tools": "Tools",
        "settings": "Settings",
        "open_folder": "Open folder...",
        "recent_folders": "Recent folders",
        "reload": "Reload",
        "save": "Save",
        "export_json": "Export as JSON...",
        "export_yaml": "Export as YAML...",
        "exit": "Exit",
        "add_comment": "Add comment...",
        "edit_comment": "Edit comment...",
        "remove_comment": "Remove comment",
        "remove_orphans": "Remove orphaned entries",
        "sort_names": "Sort by name",
        "preferences": "Preferences...",
        "table_name": "Name",
        "table_comment": "Comment",
        "comment_title": "Comment",
        "format": "Format",
        "format_auto": "Auto-detect",
        "format_tc": "Total Commander",
        "format_dc": "Double Commander",
        "encoding": "Encoding",
        "fallback_encoding": "Encoding without BOM",
        "fallback_platform": "Platform default",
        "language": "Language",
        "default_format": "Default format",
        "no_folder": "No folder opened",
        "missing_data": "Missing data",
        "name_required": "Name is required.",
        "unsaved_title": "Unsaved changes",
        "unsaved_question": "Save changes to descript.ion?",
        "loaded": "Loaded {count} comments",
        "no_file": "No descript.ion in this folder",
        "saved": "Saved {path}",
        "orphans_removed": "Removed {count} orphaned entries",
        "exported": "Exported to {path}",
    },
    "Русский": {
        "app_title": "Редактор комментариев descript.ion",
        "file": "Файл",
        "edit": "Правка",
        "tools": "Инструменты",
        "settings": "Настройки",
        "open_folder": "Открыть папку...",
        "recent_folders": "Недавние папки",
        "reload": "Перезагрузить",
        "save": "Сохранить",
        "export_json": "Экспорт в JSON...",
        "export_yaml": "Экспорт в YAML...",
        "exit": "Выход",
        "add_comment": "Добавить комментарий...",
        "edit_comment": "Изменить комментарий...",
        "remove_comment": "Удалить комментарий",
        "remove_orphans": "Удалить записи без файлов",
        "sort_names": "Сортировать по имени",
        "preferences": "Параметры...",
        "table_name": "Имя",
        "table_comment": "Комментарий",
        "comment_title": "Комментарий",
        "format": "Формат",
        "format_auto": "Автоопределение",
        "format_tc": "Total Commander",
        "format_dc": "Double Commander",
        "encoding": "Кодировка",
        "fallback_encoding": "Кодировка без BOM",
        "fallback_platform": "Системная",
        "language": "Язык",
        "default_format": "Формат по умолчанию",
        "no_folder": "Папка не открыта",
        "missing_data": "Нет данных",
        "name_required": "Требуется имя.",
        "unsaved_title": "Несохранённые изменения",
        "unsaved_question": "Сохранить изменения в descript.ion?",
        "loaded": "Загружено комментариев: {count}",
        "no_file": "В этой папке нет descript.ion",
        "saved": "Сохранено: {path}",
        "orphans_removed": "Удалено записей: {count}",
        "exported": "Экспортировано: {path}",
    },
    "日本語": {
        "app_title": "descript.ion コメントエディタ",
        "file": "ファイル",
        "edit": "編集",
        "tools": "ツール",
        "settings": "設定",
        "open_folder": "フォルダを開く...",
        "recent_folders": "最近使ったフォルダ",
        "reload": "再読み込み",
        "save": "保存",
        "export_json": "JSON にエクスポート...",
        "export_yaml": "YAML にエクスポート...",
        "exit": "終了",
        "add_comment": "コメントを追加...",
        "edit_comment": "コメントを編集...",
        "remove_comment": "コメントを削除",
        "remove_orphans": "存在しない項目を削除",
        "sort_names": "名前で並べ替え",
        "preferences": "環境設定...",
        "table_name": "名前",
        "table_comment": "コメント",
        "comment_title": "コメント",
        "format": "形式",
        "format_auto": "自動判別",
        "format_tc": "Total Commander",
        "format_dc": "Double Commander",
        "encoding": "文字コード",
        "fallback_encoding": "BOM なしの文字コード",
        "fallback_platform": "システム既定",
        "language": "言語",
        "default_format": "既定の形式",
        "no_folder": "フォルダが開かれていません",
        "missing_data": "入力不足",
        "name_required": "名前が必要です。",
        "unsaved_title": "未保存の変更",
        "unsaved_question": "descript.ion に変更を保存しますか？",
        "loaded": "{count} 件のコメントを読み込みました",
        "no_file": "このフォルダに descript.ion はありません",
        "saved": "{path} に保存しました",
        "orphans_removed": "{count} 件を削除しました",
        "exported": "{path} にエクスポートしました",
    },
}

FORMAT_KEYS = [
    (CommentFormat.AUTO_DETECT, "format_auto"),
    (CommentFormat.TOTAL_COMMANDER, "format_tc"),
    (CommentFormat.DOUBLE_COMMANDER, "format_dc"),
]

FALLBACK_ENCODINGS = ["", "cp1252", "cp1251", "cp866", "cp932", "cp936", "cp950", "latin-1", "utf-8"]


def tr(lang: str, key: str) -> str:
    table = TRANSLATIONS.get(lang) or TRANSLATIONS["English"]
    return table.get(key, TRANSLATIONS["English"].get(key, key))


def _fill_format_combo(combo: QtWidgets.QComboBox, lang: str, current: CommentFormat) -> None:
    combo.clear()
    for fmt, key in FORMAT_KEYS:
        combo.addItem(tr(lang, key), fmt.value)
    idx = combo.findData(current.value)
    if idx >= 0:
        combo.setCurrentIndex(idx)


class PreferencesDialog(QtWidgets.QDialog):
    def __init__(
        self,
        lang: str,
        default_format: CommentFormat,
        fallback_encoding: str,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.lang = lang
        self.setWindowTitle(tr(self.lang, "preferences"))
        layout = QtWidgets.QFormLayout(self)

        self.lang_combo = QtWidgets.QComboBox()
        self.lang_combo.addItems(list(TRANSLATIONS))
        idx = self.lang_combo.findText(lang)
        if idx >= 0:
            self.lang_combo.setCurrentIndex(idx)

        self.format_combo = QtWidgets.QComboBox()
        _fill_format_combo(self.format_combo, lang, default_format)

        self.encoding_combo = QtWidgets.QComboBox()
        self.encoding_combo.setEditable(True)
        for name in FALLBACK_ENCODINGS:
            self.encoding_combo.addItem(name or tr(self.lang, "fallback_platform"), name)
        idx = self.encoding_combo.findData(fallback_encoding)
        if idx >= 0:
            self.encoding_combo.setCurrentIndex(idx)
        else:
            self.encoding_combo.setEditText(fallback_encoding)

        layout.addRow(tr(self.lang, "language"), self.lang_combo)
        layout.addRow(tr(self.lang, "default_format"), self.format_combo)
        layout.addRow(tr(self.lang, "fallback_encoding"), self.encoding_combo)

        buttons = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok
            | QtWidgets.QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def get_data(self) -> tuple[str, CommentFormat, str]:
        text = self.encoding_combo.currentText().strip()
        index = self.encoding_combo.currentIndex()
        encoding = self.encoding_combo.currentData() if index >= 0 and text == self.encoding_combo.itemText(index) else text
        return (
            self.lang_combo.currentText(),
            CommentFormat(self.format_combo.currentData()),
            str(encoding or ""),
        )


class EditorWindow(QtWidgets.QMainWindow):
    def __init__(self, folder: Optional[Path] = None) -> None:
        super().__init__()
        self.resize(900, 600)

        self.settings = QtCore.QSettings("DescriptIonEditor", "DescriptIonEditor")
        self.ui_language = str(self.settings.value("ui_language", "English"))
        self.default_format = CommentFormat(
            self.settings.value("default_format", CommentFormat.AUTO_DETECT.value)
        )
        self.fallback_encoding = str(self.settings.value("fallback_encoding", ""))
        self.recent_folders: list[str] = list(self.settings.value("recent_folders", []) or [])

        self.store: Optional[DescriptionStore] = None
        self._dirty = False
        self._suppress_format_change = False

        self._build_ui()
        self._build_menu()
        self._connect_actions()
        self._apply_language()

        if folder is None:
            last = str(self.settings.value("last_folder", ""))
            folder = Path(last) if last and Path(last).is_dir() else None
        if folder is not None:
            self._open_folder(folder)
        self._update_state()

    def config(self) -> DescriptionConfig:
        return DescriptionConfig(
            default_format=self.default_format,
            fallback_encoding=self.fallback_encoding or None,
        )

    def _build_ui(self) -> None:
        central = QtWidgets.QWidget()
        self.setCentralWidget(central)
        layout = QtWidgets.QVBoxLayout(central)

        top = QtWidgets.QHBoxLayout()
        self.folder_label = QtWidgets.QLabel("")
        self.format_label = QtWidgets.QLabel("")
        self.format_combo = QtWidgets.QComboBox()
        self.encoding_label = QtWidgets.QLabel("")
        top.addWidget(self.folder_label, 1)
        top.addWidget(self.format_label)
        top.addWidget(self.format_combo)
        top.addWidget(self.encoding_label)
        layout.addLayout(top)

        self.table = QtWidgets.QTableWidget(0, 2)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.ExtendedSelection)
        self.table.setEditTriggers(QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        layout.addWidget(self.table, 1)

        buttons = QtWidgets.QHBoxLayout()
        self.add_btn = QtWidgets.QPushButton()
        self.edit_btn = QtWidgets.QPushButton()
        self.remove_btn = QtWidgets.QPushButton()
        self.save_btn = QtWidgets.QPushButton()
        buttons.addWidget(self.add_btn)
        buttons.addWidget(self.edit_btn)
        buttons.addWidget(self.remove_btn)
        buttons.addStretch(1)
        buttons.addWidget(self.save_btn)
        layout.addLayout(buttons)

        self.status_bar = QtWidgets.QStatusBar()
        self.setStatusBar(self.status_bar)

    def _build_menu(self) -> None:
        menu = self.menuBar()
        self.file_menu = menu.addMenu("")
        self.open_action = self.file_menu.addAction("")
        self.open_action.setShortcut(QtGui.QKeySequence.StandardKey.Open)
        self.recent_menu = self.file_menu.addMenu("")
        self.reload_action = self.file_menu.addAction("")
        self.reload_action.setShortcut(QtGui.QKeySequence.StandardKey.Refresh)
        self.save_action = self.file_menu.addAction("")
        self.save_action.setShortcut(QtGui.QKeySequence.StandardKey.Save)
        self.file_menu.addSeparator()
        self.export_json_action = self.file_menu.addAction("")
        self.export_yaml_action = self.file_menu.addAction("")
        self.file_menu.addSeparator()
        self.exit_action = self.file_menu.addAction("")

        self.edit_menu = menu.addMenu("")
        self.add_action = self.edit_menu.addAction("")
        self.edit_action = self.edit_menu.addAction("")
        self.remove_action = self.edit_menu.addAction("")
        self.remove_action.setShortcut(QtGui.QKeySequence.StandardKey.Delete)

        self.tools_menu = menu.addMenu("")
        self.orphans_action = self.tools_menu.addAction("")
        self.sort_action = self.tools_menu.addAction("")

        self.settings_menu = menu.addMenu("")
        self.preferences_action = self.settings_menu.addAction("")

    def _connect_actions(self) -> None:
        self.open_action.triggered.connect(self._choose_folder)
        self.reload_action.triggered.connect(self._reload)
        self.save_action.triggered.connect(self._save)
        self.export_json_action.triggered.connect(lambda: self._export("json"))
        self.export_yaml_action.triggered.connect(lambda: self._export("yaml"))
        self.exit_action.triggered.connect(self.close)
        self.add_action.triggered.connect(self._add_comment)
        self.edit_action.triggered.connect(self._edit_comment)
        self.remove_action.triggered.connect(self._remove_comments)
        self.orphans_action.triggered.connect(self._remove_orphans)
        self.sort_action.triggered.connect(self._sort)
        self.preferences_action.triggered.connect(self._show_preferences)
        self.add_btn.clicked.connect(self._add_comment)
        self.edit_btn.clicked.connect(self._edit_comment)
        self.remove_btn.clicked.connect(self._remove_comments)
        self.save_btn.clicked.connect(self._save)
        self.table.cellDoubleClicked.connect(lambda row, _col: self._edit_comment())
        self.format_combo.currentIndexChanged.connect(self._on_format_changed)

    def _apply_language(self) -> None:
        lang = self.ui_language
        self.file_menu.setTitle(tr(lang, "file"))
        self.open_action.setText(tr(lang, "open_folder"))
        self.recent_menu.setTitle(tr(lang, "recent_folders"))
        self.reload_action.setText(tr(lang, "reload"))
        self.save_action.setText(tr(lang, "save"))
        self.export_json_action.setText(tr(lang, "export_json"))
        self.export_yaml_action.setText(tr(lang, "export_yaml"))
        self.exit_action.setText(tr(lang, "exit"))
        self.edit_menu.setTitle(tr(lang, "edit"))
        self.add_action.setText(tr(lang, "add_comment"))
        self.edit_action.setText(tr(lang, "edit_comment"))
        self.remove_action.setText(tr(lang, "remove_comment"))
        self.tools_menu.setTitle(tr(lang, "tools"))
        self.orphans_action.setText(tr(lang, "remove_orphans"))
        self.sort_action.setText(tr(lang, "sort_names"))
        self.settings_menu.setTitle(tr(lang, "settings"))
        self.preferences_action.setText(tr(lang, "preferences"))
        self.add_btn.setText(tr(lang, "add_comment"))
        self.edit_btn.setText(tr(lang, "edit_comment"))
        self.remove_btn.setText(tr(lang, "remove_comment"))
        self.save_btn.setText(tr(lang, "save"))
        self.format_label.setText(tr(lang, "format"))
        self.table.setHorizontalHeaderLabels([tr(lang, "table_name"), tr(lang, "table_comment")])
        self._rebuild_recent_menu()
        self._update_state()

    def _t(self, key: str) -> str:
        return tr(self.ui_language, key)

    def _update_state(self) -> None:
        title = tr(self.ui_language, "app_title")
        if self.store is None:
            self.folder_label.setText(self._t("no_folder"))
            self.encoding_label.setText("")
            self.setWindowTitle(title)
        else:
            self.folder_label.setText(str(self.store.directory))
            self.encoding_label.setText(f"{self._t('encoding')}: {self.store.encoding.value}")
            marker = "*" if self._dirty else ""
            self.setWindowTitle(f"{marker}{self.store.directory.name} - {title}")
        self._suppress_format_change = True
        current = self.store.format if self.store else self.default_format
        _fill_format_combo(self.format_combo, self.ui_language, current)
        self._suppress_format_change = False
        has_store = self.store is not None
        for widget in (
            self.format_combo,
            self.add_btn,
            self.edit_btn,
            self.remove_btn,
            self.save_btn,
        ):
            widget.setEnabled(has_store)
        for action in (
            self.reload_action,
            self.save_action,
            self.export_json_action,
            self.export_yaml_action,
            self.add_action,
            self.edit_action,
            self.remove_action,
            self.orphans_action,
            self.sort_action,
        ):
            action.setEnabled(has_store)

    def _refresh_table(self) -> None:
        self.table.setRowCount(0)
        if self.store is None:
            return
        items = self.store.entries.items()
        self.table.setRowCount(len(items))
        for row, (name, comment) in enumerate(items):
            name_item = QtWidgets.QTableWidgetItem(name)
            comment_item = QtWidgets.QTableWidgetItem(comment.replace("\n", " ↵ "))
            comment_item.setToolTip(comment)
            self.table.setItem(row, 0, name_item)
            self.table.setItem(row, 1, comment_item)
        self.table.resizeColumnToContents(0)

    def _selected_names(self) -> list[str]:
        rows = sorted({index.row() for index in self.table.selectionModel().selectedRows()})
        names = []
        for row in rows:
            item = self.table.item(row, 0)
            if item is not None:
                names.append(item.text())
        return names

    def _mark_dirty(self) -> None:
        self._dirty = True
        self._refresh_table()
        self._update_state()

    def _confirm_discard(self) -> bool:
        if not self._dirty or self.store is None:
            return True
        choice = QtWidgets.QMessageBox.question(
            self,
            self._t("unsaved_title"),
            self._t("unsaved_question"),
            QtWidgets.QMessageBox.StandardButton.Save
            | QtWidgets.QMessageBox.StandardButton.Discard
            | QtWidgets.QMessageBox.StandardButton.Cancel,
            QtWidgets.QMessageBox.StandardButton.Save,
        )
        if choice == QtWidgets.QMessageBox.StandardButton.Cancel:
            return False
        if choice == QtWidgets.QMessageBox.StandardButton.Save:
            return self._save()
        return True

    def _choose_folder(self) -> None:
        start = str(self.store.directory) if self.store else str(self.settings.value("last_folder", ""))
        folder = QtWidgets.QFileDialog.getExistingDirectory(self, self._t("open_folder"), start)
        if folder:
            self._open_folder(Path(folder))

    def _open_folder(self, folder: Path) -> None:
        if not self._confirm_discard():
            return
        try:
            store = DescriptionStore(folder, config=self.config())
            found = store.load()
        except Exception as exc:
            logger.exception("Failed to open folder %s", folder)
            self._show_error(str(exc))
            return
        self.store = store
        self._dirty = False
        self.settings.setValue("last_folder", str(folder))
        self._add_recent_folder(str(folder))
        self._refresh_table()
        self._update_state()
        if found:
            self._set_status(self._t("loaded").format(count=len(store)))
        else:
            self._set_status(self._t("no_file"))

    def _reload(self) -> None:
        if self.store is None:
            return
        self._open_folder(self.store.directory)

    def _save(self) -> bool:
        if self.store is None:
            return False
        try:
            path = self.store.save()
        except Exception as exc:
            logger.exception("Failed to save descript.ion")
            self._show_error(str(exc))
            return False
        self._dirty = False
        self._update_state()
        self._set_status(self._t("saved").format(path=path))
        return True

    def _export(self, kind: str) -> None:
        if self.store is None:
            return
        suffix = "json" if kind == "json" else "yaml"
        default = str(self.store.directory / f"descript.{suffix}")
        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self,
            self._t(f"export_{kind}"),
            default,
            f"{suffix.upper()} Files (*.{suffix})",
        )
        if not path:
            return
        try:
            if kind == "json":
                export_comments_json(self.store, Path(path))
            else:
                export_comments_yaml(self.store, Path(path))
        except Exception as exc:
            logger.exception("Failed to export comments")
            self._show_error(str(exc))
            return
        self._set_status(self._t("exported").format(path=path))

    def _add_comment(self) -> None:
        if self.store is None:
            return
        dialog = CommentDialog(tr=self._t, parent=self)
        data = dialog.get_data()
        if data is None:
            return
        name, comment = data
        self.store.set_comment(name, comment)
        self._mark_dirty()

    def _edit_comment(self) -> None:
        if self.store is None:
            return
        names = self._selected_names()
        if not names:
            return
        name = names[0]
        dialog = CommentDialog(name, self.store.get_comment(name) or "", tr=self._t, parent=self)
        data = dialog.get_data()
        if data is None:
            return
        new_name, comment = data
        if new_name.lower() != name.lower():
            self.store.remove_comment(name)
        self.store.set_comment(new_name, comment)
        self._mark_dirty()

    def _remove_comments(self) -> None:
        if self.store is None:
            return
        names = self._selected_names()
        if not names:
            return
        for name in names:
            self.store.remove_comment(name)
        self._mark_dirty()

    def _remove_orphans(self) -> None:
        if self.store is None:
            return
        try:
            removed = self.store.remove_orphaned_entries()
        except Exception as exc:
            logger.exception("Failed to check orphaned entries")
            self._show_error(str(exc))
            return
        if removed:
            self._mark_dirty()
        self._set_status(self._t("orphans_removed").format(count=len(removed)))

    def _sort(self) -> None:
        if self.store is None:
            return
        collator = QtCore.QCollator(QtCore.QLocale())
        collator.setNumericMode(True)
        self.store.sort(key=functools.cmp_to_key(collator.compare))
        self._mark_dirty()

    def _on_format_changed(self, _index: int) -> None:
        if self._suppress_format_change or self.store is None:
            return
        fmt = CommentFormat(self.format_combo.currentData())
        if fmt is self.store.format:
            return
        self.store.format = fmt
        self._mark_dirty()

    def _show_preferences(self) -> None:
        dialog = PreferencesDialog(self.ui_language, self.default_format, self.fallback_encoding, self)
        if dialog.exec() != QtWidgets.QDialog.DialogCode.Accepted:
            return
        lang, default_format, fallback_encoding = dialog.get_data()
        self.ui_language = lang
        self.default_format = default_format
        self.fallback_encoding = fallback_encoding
        self.settings.setValue("ui_language", lang)
        self.settings.setValue("default_format", default_format.value)
        self.settings.setValue("fallback_encoding", fallback_encoding)
        if self.store is not None:
            self.store.config = self.config()
        self._apply_language()

    def _add_recent_folder(self, folder: str) -> None:
        if folder in self.recent_folders:
            self.recent_folders.remove(folder)
        self.recent_folders.insert(0, folder)
        del self.recent_folders[MAX_RECENT_FOLDERS:]
        self.settings.setValue("recent_folders", self.recent_folders)
        self._rebuild_recent_menu()

    def _rebuild_recent_menu(self) -> None:
        self.recent_menu.clear()
        for folder in self.recent_folders:
            action = self.recent_menu.addAction(folder)
            action.triggered.connect(lambda _checked=False, f=folder: self._open_folder(Path(f)))
        self.recent_menu.setEnabled(bool(self.recent_folders))

    def _set_status(self, message: str) -> None:
        self.status_bar.showMessage(message, 5000)

    def _show_error(self, message: str) -> None:
        QtWidgets.QMessageBox.critical(self, "Error", message)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        if not self._confirm_discard():
            event.ignore()
            return
        event.accept()
