"""Główne okno aplikacji GUI."""

from __future__ import annotations

from typing import List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from space_analyzer.core.models import Drive, Entry, NavigationSnapshot
from space_analyzer.core.sorting import SortKey
from .localization import LocalizationManager
from .presentation import (
    active_drive,
    breadcrumbs,
    file_icon,
    format_size,
    percent_of,
    sort_indicator,
    status_text,
    type_label,
    usage_color,
)
from .view_models import NavigationViewModel

_COLUMNS = ("icon", "name", "type", "size", "usage", "share", "items")
_SORTABLE_COLUMNS = {1: SortKey.NAME, 2: SortKey.TYPE, 3: SortKey.SIZE}
_PAGE_MESSAGE = 0
_PAGE_TABLE = 1


class DriveCard(QWidget):
    """Przycisk dysku z paskiem zajętości."""

    def __init__(self, drive: Drive, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.drive = drive
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        self.button = QPushButton()
        self.button.setCheckable(True)
        self.button.setMinimumWidth(140)
        layout.addWidget(self.button)

        self.bar = QProgressBar()
        self.bar.setRange(0, 100)
        self.bar.setTextVisible(False)
        self.bar.setMaximumHeight(6)
        percent = drive.usage_percent()
        self.bar.setValue(int(percent))
        self.bar.setStyleSheet(f"QProgressBar::chunk {{ background: {usage_color(percent)}; }}")
        layout.addWidget(self.bar)

        self.sizes = QLabel()
        self.sizes.setStyleSheet("color: #888; font-size: 11px;")
        layout.addWidget(self.sizes)

    def retranslate(self, localization: LocalizationManager) -> None:
        label = self.drive.mount_point.rstrip("\\") or self.drive.mount_point
        self.button.setText(f"{label}  {self.drive.file_system or self.drive.name or '—'}")
        self.sizes.setText(
            "  ".join(
                [
                    localization.text("drive.used", size=format_size(self.drive.used_space)),
                    localization.text("drive.total", size=format_size(self.drive.total_space)),
                ]
            )
        )


class MainWindow(QMainWindow):
    """Główne okno aplikacji Space Analyzer."""

    def __init__(
        self,
        *,
        view_model: NavigationViewModel | None = None,
        localization: LocalizationManager | None = None,
    ) -> None:
        super().__init__()

        self._view_model = view_model or NavigationViewModel()
        self._localization = localization or LocalizationManager()
        self._drive_cards: List[DriveCard] = []
        self._rendered_revision = -1
        self._rendered_crumbs: tuple[str, ...] | None = None
        self._row_paths: List[str] = []

        self.setMinimumSize(900, 600)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        header_layout = QHBoxLayout()
        self._title_label = QLabel()
        self._title_label.setStyleSheet("font-size: 20px; font-weight: bold;")
        header_layout.addWidget(self._title_label)
        header_layout.addStretch(1)

        self._language_label = QLabel()
        header_layout.addWidget(self._language_label)
        self._language_selector = QComboBox()
        for locale, display in self._localization.available_locales().items():
            self._language_selector.addItem(display, locale)
        self._language_selector.currentIndexChanged.connect(self._on_language_changed)
        header_layout.addWidget(self._language_selector)
        layout.addLayout(header_layout)

        self._drives_layout = QHBoxLayout()
        self._drives_layout.setAlignment(Qt.AlignmentFlag.AlignLeft)
        layout.addLayout(self._drives_layout)

        self._breadcrumb_widget = QWidget()
        self._breadcrumb_layout = QHBoxLayout(self._breadcrumb_widget)
        self._breadcrumb_layout.setContentsMargins(0, 0, 0, 0)
        self._breadcrumb_layout.setAlignment(Qt.AlignmentFlag.AlignLeft)
        self._btn_up = QPushButton("↑")
        self._btn_up.setFixedWidth(32)
        self._btn_up.clicked.connect(self._view_model.go_up)
        self._breadcrumb_layout.addWidget(self._btn_up)
        self._crumb_buttons: List[QWidget] = []
        layout.addWidget(self._breadcrumb_widget)

        self._pages = QStackedWidget()
        self._message_label = QLabel()
        self._message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message_label.setWordWrap(True)
        self._pages.addWidget(self._message_label)

        self._table = QTableWidget(0, len(_COLUMNS))
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self._table.horizontalHeader().sectionClicked.connect(self._on_header_clicked)
        self._table.cellClicked.connect(self._on_cell_clicked)
        self._pages.addWidget(self._table)
        layout.addWidget(self._pages, stretch=1)

        self.status_label = QLabel()
        self.status_label.setStyleSheet("margin-top: 6px; color: #666;")
        layout.addWidget(self.status_label)

        self._view_model.stateChanged.connect(self._on_state_changed)
        self._view_model.drivesChanged.connect(self._populate_drives)
        self._view_model.load_drives()
        self._retranslate_ui()

    # ------------------------------------------------------------------
    # Reakcje UI
    # ------------------------------------------------------------------

    def _on_state_changed(self) -> None:
        self._render(self._view_model.snapshot())

    def _on_header_clicked(self, column: int) -> None:
        key = _SORTABLE_COLUMNS.get(column)
        if key is not None:
            self._view_model.sort_by(key)

    def _on_cell_clicked(self, row: int, _column: int) -> None:
        if row >= len(self._row_paths):
            return
        snapshot = self._view_model.snapshot()
        path = self._row_paths[row]
        entry = next((item for item in snapshot.entries if item.path == path), None)
        if entry is not None and entry.is_dir:
            self._view_model.navigate(entry.path)

    def _on_language_changed(self, index: int) -> None:
        locale = self._language_selector.itemData(index)
        if not locale or locale == self._localization.locale:
            return
        self._localization.set_locale(locale)
        self._retranslate_ui()

    def closeEvent(self, event) -> None:  # type: ignore[no-untyped-def]
        self._view_model.shutdown()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Lokalizacja
    # ------------------------------------------------------------------

    def _retranslate_ui(self) -> None:
        self.setWindowTitle(self._text("app.title"))
        self._title_label.setText(self._text("app.title"))
        self._language_label.setText(self._text("language.label"))
        current_index = self._language_selector.findData(self._localization.locale)
        if current_index >= 0:
            self._language_selector.blockSignals(True)
            self._language_selector.setCurrentIndex(current_index)
            self._language_selector.blockSignals(False)
        self._btn_up.setToolTip(self._text("button.up"))
        for card in self._drive_cards:
            card.retranslate(self._localization)
        self._render(self._view_model.snapshot(), force=True)

    def _text(self, key: str, **values: object) -> str:
        return self._localization.text(key, **values)

    # ------------------------------------------------------------------
    # Renderowanie stanu
    # ------------------------------------------------------------------

    def _populate_drives(self) -> None:
        for card in self._drive_cards:
            self._drives_layout.removeWidget(card)
            card.deleteLater()
        self._drive_cards = []
        for drive in self._view_model.drives():
            card = DriveCard(drive)
            card.button.clicked.connect(lambda _checked=False, mount=drive.mount_point: self._view_model.navigate(mount))
            card.retranslate(self._localization)
            self._drives_layout.addWidget(card)
            self._drive_cards.append(card)

    def _render(self, snapshot: NavigationSnapshot, *, force: bool = False) -> None:
        if not force and snapshot.revision == self._rendered_revision:
            return
        self._rendered_revision = snapshot.revision

        self._render_drives(snapshot)
        self._render_breadcrumbs(snapshot)
        self._render_content(snapshot)
        self.status_label.setText(status_text(snapshot, self._localization))

    def _render_drives(self, snapshot: NavigationSnapshot) -> None:
        current = active_drive([card.drive for card in self._drive_cards], snapshot.location)
        for card in self._drive_cards:
            card.button.setChecked(current is not None and card.drive == current)

    def _render_breadcrumbs(self, snapshot: NavigationSnapshot) -> None:
        self._breadcrumb_widget.setVisible(snapshot.has_location() or snapshot.loading)
        self._btn_up.setEnabled(not snapshot.loading)

        crumbs = breadcrumbs(snapshot.location)
        key = tuple(crumb.path for crumb in crumbs)
        if key != self._rendered_crumbs:
            for widget in self._crumb_buttons:
                self._breadcrumb_layout.removeWidget(widget)
                widget.deleteLater()
            self._crumb_buttons = []
            for index, crumb in enumerate(crumbs):
                if index > 0:
                    separator = QLabel("›")
                    self._breadcrumb_layout.addWidget(separator)
                    self._crumb_buttons.append(separator)
                button = QPushButton(crumb.label)
                button.setFlat(True)
                button.setProperty("crumb_last", index == len(crumbs) - 1)
                button.clicked.connect(lambda _checked=False, path=crumb.path: self._view_model.navigate(path))
                self._breadcrumb_layout.addWidget(button)
                self._crumb_buttons.append(button)
            self._rendered_crumbs = key

        for widget in self._crumb_buttons:
            if isinstance(widget, QPushButton):
                widget.setEnabled(not snapshot.loading and not widget.property("crumb_last"))

    def _render_content(self, snapshot: NavigationSnapshot) -> None:
        if snapshot.loading:
            self._show_message(self._text("loading.reading", location=snapshot.target))
        elif snapshot.error is not None:
            self._show_message(self._text("error.listing", message=snapshot.error), error=True)
        elif not snapshot.has_location():
            self._show_message(self._text("welcome.select_drive"))
        elif snapshot.is_empty():
            self._show_message(self._text("welcome.empty"))
        else:
            self._populate_table(snapshot)
            self._pages.setCurrentIndex(_PAGE_TABLE)

    def _show_message(self, text: str, *, error: bool = False) -> None:
        self._message_label.setText(("⚠️ " if error else "") + text)
        self._message_label.setStyleSheet("color: #f85149;" if error else "color: #888;")
        self._pages.setCurrentIndex(_PAGE_MESSAGE)

    def _populate_table(self, snapshot: NavigationSnapshot) -> None:
        headers = [self._text(f"column.{column}") for column in _COLUMNS]
        for column, key in _SORTABLE_COLUMNS.items():
            headers[column] += sort_indicator(snapshot, key.value)
        self._table.setHorizontalHeaderLabels(headers)

        entries = snapshot.sorted_entries()
        total = snapshot.total_size()
        largest = max(snapshot.max_size(), 1)
        self._row_paths = [entry.path for entry in entries]
        self._table.setRowCount(len(entries))
        for row, entry in enumerate(entries):
            self._populate_row(row, entry, snapshot, total=total, largest=largest)

    def _populate_row(self, row: int, entry: Entry, snapshot: NavigationSnapshot, *, total: int, largest: int) -> None:
        sizing = snapshot.is_sizing(entry)
        failed = entry.path in snapshot.failed

        if sizing:
            size_text = self._text("size.pending")
        elif failed:
            size_text = self._text("size.failed")
        else:
            size_text = format_size(entry.size)

        cells = [
            file_icon(entry.name, entry.is_dir),
            entry.name,
            type_label(entry.name, entry.is_dir, self._localization),
            size_text,
            "",
            "" if sizing else f"{percent_of(entry.size, total):.1f}%",
            f"{entry.item_count:,}" if entry.is_dir else "",
        ]
        for column, text in enumerate(cells):
            item = QTableWidgetItem(text)
            if column == 1:
                item.setToolTip(entry.path)
            if column in (3, 5, 6):
                item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            if column == 3 and failed:
                item.setToolTip(self._text("tooltip.size_failed"))
            self._table.setItem(row, column, item)

        bar = QProgressBar()
        bar.setTextVisible(False)
        bar.setMaximumHeight(10)
        if sizing:
            bar.setRange(0, 0)
        else:
            bar.setRange(0, 1000)
            bar.setValue(int(percent_of(entry.size, largest) * 10))
        self._table.setCellWidget(row, 4, bar)
