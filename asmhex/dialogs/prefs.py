# asmhex/dialogs/prefs.py
from PySide6.QtWidgets import (
    QDialog, QDialogButtonBox, QFormLayout, QHBoxLayout, QLabel,
    QLineEdit, QPushButton, QSpinBox, QFileDialog, QVBoxLayout
)

class PrefsDialog(QDialog):
    def __init__(self, settings: dict, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.settings = settings
        self.setMinimumWidth(560)

        self.nasm_edit = QLineEdit(self.settings.get("nasm_path", "nasm"))
        btn_browse_nasm = QPushButton("Browse…"); btn_browse_nasm.clicked.connect(lambda: self._browse_exe(self.nasm_edit, "Locate nasm"))
        self.objcopy_edit = QLineEdit(self.settings.get("objcopy_path", "objcopy"))
        btn_browse_objcopy = QPushButton("Browse…"); btn_browse_objcopy.clicked.connect(lambda: self._browse_exe(self.objcopy_edit, "Locate objcopy"))

        self.timeout_spin = QSpinBox(); self.timeout_spin.setRange(0, 3600)
        self.timeout_spin.setValue(int(self.settings.get("tool_timeout") or 0)); self.timeout_spin.setSuffix(" s per tool call")
        timeout_hint = QLabel("(0 waits forever)")

        self.poll_spin = QSpinBox(); self.poll_spin.setRange(20, 2000)
        self.poll_spin.setValue(int(self.settings.get("poll_interval_ms", 100))); self.poll_spin.setSuffix(" ms")

        form = QFormLayout()
        row_nasm = QHBoxLayout(); row_nasm.addWidget(self.nasm_edit); row_nasm.addWidget(btn_browse_nasm)
        form.addRow("nasm path:", row_nasm)
        row_oc = QHBoxLayout(); row_oc.addWidget(self.objcopy_edit); row_oc.addWidget(btn_browse_objcopy)
        form.addRow("objcopy path:", row_oc)
        form.addRow("Tool timeout:", self.timeout_spin); form.addRow("", timeout_hint)
        form.addRow("Display refresh:", self.poll_spin)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept); buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self); layout.addLayout(form); layout.addWidget(buttons)

    def _browse_exe(self, edit: QLineEdit, title: str):
        f, _ = QFileDialog.getOpenFileName(self, title, edit.text() or "/usr/bin", "All (*)")
        if f: edit.setText(f)

    def get_values(self) -> dict:
        return {
            "nasm_path": self.nasm_edit.text().strip() or "nasm",
            "objcopy_path": self.objcopy_edit.text().strip() or "objcopy",
            "tool_timeout": int(self.timeout_spin.value()),
            "poll_interval_ms": int(self.poll_spin.value()),
        }
