from .scanner import CancelFlag, TreeScanner, scan
from .listing import get_common_directories, list_directory

__all__ = ["CancelFlag", "TreeScanner", "scan", "get_common_directories", "list_directory"]
