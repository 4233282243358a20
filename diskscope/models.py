from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Tuple, Union
from .categories import Category

class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"

@dataclass(frozen=True)
class FileNode:
    name: str
    path: str
    size: int
    modified_at: float
    extension: str = ""
    category: Category = Category.OTHER
    kind: NodeKind = field(default=NodeKind.FILE, init=False)

@dataclass(frozen=True)
class DirectoryNode:
    name: str
    path: str
    size: int
    modified_at: float
    children: Tuple["Node", ...] = ()
    kind: NodeKind = field(default=NodeKind.DIRECTORY, init=False)

Node = Union[FileNode, DirectoryNode]

@dataclass(frozen=True)
class LargeFile:
    name: str
    path: str
    size: int
    category: Category
    modified_at: float

@dataclass(frozen=True)
class ScanStats:
    total_size: int
    file_count: int
    category_breakdown: Mapping[str, int]     # read-only; category label -> bytes, largest first
    largest_files: Tuple[LargeFile, ...]      # sorted desc by size
    dir_count: int = 0
    skipped: int = 0                          # entries that could not be read

    def __hash__(self):
        return hash((self.total_size, self.file_count, tuple(self.category_breakdown.items()),
                     self.largest_files, self.dir_count, self.skipped))

@dataclass(frozen=True)
class ScanResult:
    root: Node
    stats: ScanStats
