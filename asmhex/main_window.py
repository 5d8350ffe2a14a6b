# asmhex/main_window.py
from pathlib import Path

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QGuiApplication
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QHBoxLayout, QPushButton, QSplitter,
    QPlainTextEdit, QProgressBar, QFileDialog, QDialog, QGroupBox, QRadioButton,
    QButtonGroup, QCheckBox, QApplication
)

from .utils.settings import load_settings, save_settings
from .utils.paths import is_asm, output_dir_or_cwd
from .models.job import BitsMode
from .models.state import BatchState
from .workers.batch import BatchController
from .widgets.file_list import DropList
from .widgets.log_view import LogView
from .dialogs.prefs import PrefsDialog
from .app import apply_theme

class MainWindow(QMainWindow):
    def __init__(self, settings: dict | None = None):
        super().__init__()
        self.setWindowTitle("ASM → HEX (Flat Binary)")
        self.resize(1180, 760)
        self.settings = settings if settings is not None else load_settings()
        save_settings(self.settings)

        self.state = BatchState()
        self.controller = BatchController(self.state, self.settings, self)
        self.controller.batch_finished.connect(self.on_batch_finished)

        # --- side panel ---
        bits_box = QGroupBox("Bits Mode Settings"); bits_lay = QVBoxLayout(bits_box)
        bits_lay.addWidget(QLabel("Choose bits for your assembly:"))
        self.bits_group = QButtonGroup(self)
        current = self._bits_from_settings()
        for mode in BitsMode:
            rb = QRadioButton(mode.label); rb.setChecked(mode is current)
            self.bits_group.addButton(rb, int(mode.value)); bits_lay.addWidget(rb)
        self.chk_auto = QCheckBox("Auto-insert [bits X]")
        self.chk_auto.setChecked(bool(self.settings.get("auto_insert_bits", True)))
        bits_lay.addWidget(self.chk_auto)

        files_box = QGroupBox("File Selection"); files_lay = QVBoxLayout(files_box)
        self.file_list = DropList()
        self.file_list.pathsDropped.connect(self._add_paths)
        self.btn_add = QPushButton("📂 Add .asm Files"); self.btn_add.clicked.connect(self.add_files)
        self.btn_remove = QPushButton("❌ Remove Selected"); self.btn_remove.clicked.connect(self.remove_selected)
        row = QHBoxLayout(); row.addWidget(self.btn_add); row.addWidget(self.btn_remove)
        files_lay.addLayout(row); files_lay.addWidget(self.file_list)

        out_box = QGroupBox("Output Folder"); out_lay = QVBoxLayout(out_box)
        self.out_label = QLabel(); self.out_label.setWordWrap(True)
        self.btn_out = QPushButton("📁 Choose Folder"); self.btn_out.clicked.connect(self.choose_output_folder)
        self.btn_copy = QPushButton("📋"); self.btn_copy.setToolTip("Copy folder path")
        self.btn_copy.clicked.connect(lambda: QGuiApplication.clipboard().setText(self.settings.get("output_folder", "")))
        row = QHBoxLayout(); row.addWidget(self.btn_out); row.addWidget(self.btn_copy); row.addStretch()
        out_lay.addLayout(row); out_lay.addWidget(self.out_label)

        self.btn_convert = QPushButton("⚡ Convert to HEX"); self.btn_convert.clicked.connect(self.convert)
        self.progress_label = QLabel("⏳ Converting...")
        self.progress_bar = QProgressBar(); self.progress_bar.setRange(0, 1000); self.progress_bar.setTextVisible(False)
        self.progress_label.hide(); self.progress_bar.hide()

        logs_box = QGroupBox("Logs (color-coded)"); logs_lay = QVBoxLayout(logs_box)
        self.log_view = LogView(); logs_lay.addWidget(self.log_view)

        side = QWidget(); sv = QVBoxLayout(side)
        sv.addWidget(QLabel("A professional, multi-arch converter."))
        for w in (bits_box, files_box, out_box, self.btn_convert, self.progress_label, self.progress_bar, logs_box): sv.addWidget(w)

        # --- preview ---
        self.preview = QPlainTextEdit(); self.preview.setReadOnly(True)
        self.preview.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.preview.setPlaceholderText("The converted HEX file will appear here…")
        center = QWidget(); cv = QVBoxLayout(center)
        heading = QLabel("📜 Full HEX Preview (Entire File)"); heading.setStyleSheet("font-weight:600;")
        cv.addWidget(heading); cv.addWidget(self.preview)

        self.split = QSplitter(Qt.Horizontal)
        self.split.addWidget(side); self.split.addWidget(center)
        self.split.setSizes([380, 800])
        self.setCentralWidget(self.split)

        # --- menus ---
        m_file = self.menuBar().addMenu("&File")
        act_clear = QAction("Clear Logs", self); act_clear.triggered.connect(self.clear_logs); m_file.addAction(act_clear)
        act_exit = QAction("Exit", self); act_exit.triggered.connect(self.close); m_file.addAction(act_exit)
        m_opts = self.menuBar().addMenu("&Options")
        act_theme = QAction("🌗 Toggle Theme", self); act_theme.triggered.connect(self.toggle_theme); m_opts.addAction(act_theme)
        act_prefs = QAction("Preferences…", self); act_prefs.triggered.connect(self.open_prefs); m_opts.addAction(act_prefs)

        self._last_preview = None
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.refresh_from_state)
        self.timer.start(int(self.settings.get("poll_interval_ms", 100)))

        self._restore_layout()
        self._refresh_out_label()
        self._apply_dark(bool(self.settings.get("dark_mode", False)))

    def _bits_from_settings(self) -> BitsMode:
        try: return BitsMode.from_value(self.settings.get("bits_mode", "64"))
        except ValueError: return BitsMode.default()

    def selected_bits(self) -> BitsMode:
        return BitsMode.from_value(self.bits_group.checkedId())

    def _restore_layout(self):
        if ss := self.settings.get("split_sizes"): self.split.setSizes([int(x) for x in ss])

    def _save_layout(self):
        self.settings["split_sizes"] = self.split.sizes()
        self.settings["bits_mode"] = self.selected_bits().value
        self.settings["auto_insert_bits"] = self.chk_auto.isChecked()
        save_settings(self.settings)

    def closeEvent(self, e):
        self.timer.stop()
        self.controller.shutdown()
        self._save_layout()
        super().closeEvent(e)

    def add_files(self):
        files, _ = QFileDialog.getOpenFileNames(self, "Select assembly files", self.settings.get("last_dir") or str(Path.home()), "Assembly Files (*.asm)")
        if files:
            self.settings["last_dir"] = str(Path(files[0]).parent)
            self._add_paths(files)

    def _add_paths(self, paths):
        for p in paths:
            if is_asm(Path(p)): self.file_list.addItem(str(p))

    def remove_selected(self):
        for item in self.file_list.selectedItems():
            self.file_list.takeItem(self.file_list.row(item))

    def choose_output_folder(self):
        d = QFileDialog.getExistingDirectory(self, "Choose output folder", self.settings.get("output_folder") or str(Path.home()))
        if d:
            self.settings["output_folder"] = d; save_settings(self.settings)
            self._refresh_out_label()

    def _refresh_out_label(self):
        folder = self.settings.get("output_folder")
        self.out_label.setText(f"📂 {folder}" if folder else "No output folder selected.")

    def convert(self):
        files = self.file_list.paths()
        if not files: return
        started = self.controller.start(
            files,
            output_dir_or_cwd(self.settings.get("output_folder")),
            self.selected_bits(),
            self.chk_auto.isChecked(),
        )
        if started:
            self.btn_convert.setEnabled(False)

    def on_batch_finished(self, ok: int, total: int):
        self.btn_convert.setEnabled(True)
        self.statusBar().showMessage(f"Converted {ok}/{total} file(s)", 8000)

    def refresh_from_state(self):
        snap = self.state.snapshot()
        self.log_view.set_log(snap.log)
        if snap.preview_text != self._last_preview:
            self._last_preview = snap.preview_text
            self.preview.setPlainText(snap.preview_text)
        busy = snap.in_flight
        self.progress_label.setVisible(busy); self.progress_bar.setVisible(busy)
        if busy:
            self.progress_bar.setValue(int(snap.progress * 1000))
            self.progress_label.setText(f"⏳ Converting... {snap.jobs_done}/{snap.jobs_total}")

    def clear_logs(self):
        self.state.clear_log()

    def toggle_theme(self):
        self._apply_dark(not self.settings.get("dark_mode", False))
        save_settings(self.settings)

    def _apply_dark(self, dark: bool):
        self.settings["dark_mode"] = dark
        if app := QApplication.instance(): apply_theme(app, dark)
        self.log_view.set_dark(dark)

    def open_prefs(self):
        dlg = PrefsDialog(self.settings, self)
        if dlg.exec() == QDialog.Accepted:
            self.settings.update(dlg.get_values())
            save_settings(self.settings)
            self.timer.setInterval(int(self.settings.get("poll_interval_ms", 100)))
