from __future__ import annotations
import os
from enum import Enum
from typing import Dict, FrozenSet

class Category(str, Enum):
    IMAGE = "Image"
    VIDEO = "Video"
    AUDIO = "Audio"
    CODE = "Code"
    DOCUMENT = "Document"
    ARCHIVE = "Archive"
    APPLICATION = "Application"
    OTHER = "Other"

# order matters: first set containing the extension wins
CATEGORY_EXTENSIONS: Dict[Category, FrozenSet[str]] = {
    Category.IMAGE: frozenset({
        ".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".heic", ".raw", ".nef",
    }),
    Category.VIDEO: frozenset({".mp4", ".mov", ".avi", ".mkv", ".webm", ".m4v"}),
    Category.AUDIO: frozenset({".mp3", ".wav", ".aac", ".flac", ".m4a", ".ogg"}),
    Category.CODE: frozenset({
        ".js", ".ts", ".tsx", ".jsx", ".html", ".css", ".json", ".py", ".java",
        ".c", ".cpp", ".rb", ".php", ".go", ".rs", ".sql", ".yml", ".yaml",
    }),
    Category.DOCUMENT: frozenset({
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".txt", ".md", ".csv",
    }),
    Category.ARCHIVE: frozenset({".zip", ".tar", ".gz", ".rar", ".7z", ".dmg", ".iso"}),
    Category.APPLICATION: frozenset({".app", ".exe", ".msi"}),
}

EXT_MAP: Dict[str, Category] = {}
for _cat, _exts in CATEGORY_EXTENSIONS.items():
    for _ext in _exts:
        EXT_MAP.setdefault(_ext, _cat)

def extension_of(name: str) -> str:
    return os.path.splitext(name)[1].lower()

def classify(ext: str) -> Category:
    return EXT_MAP.get(ext.lower(), Category.OTHER)
