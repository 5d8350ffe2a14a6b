# asmhex/widgets/file_list.py
from pathlib import Path
from PySide6.QtCore import Signal
from PySide6.QtWidgets import QAbstractItemView, QListWidget

class DropList(QListWidget):
    pathsDropped = Signal(list)  # list[str]
    itemsReordered = Signal()    # Emitted after an internal drag-drop reorder

    def __init__(self, *a, **kw):
        super().__init__(*a, **kw)
        self.setAcceptDrops(True)
        self.setDragEnabled(True)
        self.setDragDropMode(QAbstractItemView.InternalMove)
        self.setSelectionMode(QAbstractItemView.ExtendedSelection)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)

    def paths(self) -> list[str]:
        return [self.item(i).text() for i in range(self.count())]

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            super().dragEnterEvent(event)

    def dragMoveEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            super().dragMoveEvent(event)

    def dropEvent(self, event):
        """Handle both external .asm file drops and internal reordering."""
        if event.mimeData().hasUrls():
            paths = []
            for url in event.mimeData().urls():
                if url.isLocalFile():
                    p = Path(url.toLocalFile())
                    if p.is_file() and p.suffix.lower() == ".asm": paths.append(str(p))
            if paths:
                self.pathsDropped.emit(paths)
            event.acceptProposedAction()
            return

        super().dropEvent(event)
        self.itemsReordered.emit()
