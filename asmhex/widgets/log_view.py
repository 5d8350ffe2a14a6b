# asmhex/widgets/log_view.py
import html

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QTextEdit

from ..parsers.log_lines import Severity, classify_text

LIGHT_COLORS = {
    Severity.ERROR: "#c62828",
    Severity.SUCCESS: "#2e7d32",
    Severity.WARNING: "#b8860b",
    Severity.INFO: None,
}

DARK_COLORS = {
    Severity.ERROR: "#ff5252",
    Severity.SUCCESS: "#69f0ae",
    Severity.WARNING: "#ffd740",
    Severity.INFO: None,
}

class LogView(QTextEdit):
    """Read-only log pane; each line colored by its severity marker."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setPlaceholderText("Conversion log will appear here…")
        self._text = None
        self.colors = LIGHT_COLORS

    def set_dark(self, dark: bool):
        self.colors = DARK_COLORS if dark else LIGHT_COLORS
        text, self._text = self._text, None
        if text is not None: self.set_log(text)

    def set_log(self, text: str):
        if text == self._text: return
        self._text = text
        rows = []
        for sev, line in classify_text(text):
            esc = html.escape(line) or "&nbsp;"
            color = self.colors.get(sev)
            rows.append(f'<span style="color:{color}">{esc}</span>' if color else esc)
        self.setHtml("<pre style='margin:0'>" + "<br>".join(rows) + "</pre>")
        self.moveCursor(QTextCursor.End)
