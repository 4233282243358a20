from __future__ import annotations
from PySide6.QtCore import QThread, Signal
from .scanner import CancelFlag, scan

class ScanThread(QThread):
    progress = Signal(str, int, int, object)  # path, files, dirs, bytes_scanned (may be int64)
    done = Signal(object)                      # ScanResult
    not_found = Signal(str)                    # root path
    error = Signal(str)

    def __init__(self, path: str, **options):
        super().__init__()
        self.path = path
        self.options = options
        self.cancel_flag = CancelFlag()

    def cancel(self):
        self.cancel_flag.cancel()

    def run(self):
        try:
            def prog(cur: str, files: int, dirs: int, bytes_scanned: int):
                self.progress.emit(cur, files, dirs, bytes_scanned)
            res = scan(self.path, progress=prog, cancel_flag=self.cancel_flag, **self.options)
            if res is None:
                self.not_found.emit(self.path)
            else:
                self.done.emit(res)
        except Exception as e:
            self.error.emit(str(e))
