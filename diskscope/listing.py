from __future__ import annotations
import logging
import os
import stat as statmod
import sys
from typing import Iterable, List, Tuple
from .drives import removable_mountpoints
from .models import DirectoryNode, Node
from .scanner import IGNORED_NAMES, file_node

logger = logging.getLogger(__name__)

def list_directory(dir_path: str,
                   ignore: Iterable[str] = IGNORED_NAMES,
                   follow_symlinks: bool = False) -> List[Node]:
    """Immediate children of `dir_path`, no recursion and no folder sizes.

    Directories come back with size 0 and no children. A directory that cannot
    be listed yields an empty list; entries that cannot be stat'ed are dropped.
    """
    ignore = frozenset(ignore)
    dir_path = os.path.abspath(dir_path)
    try:
        with os.scandir(dir_path) as it:
            listing = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("cannot list %s: %s", dir_path, e)
        return []

    out: List[Node] = []
    for entry in listing:
        if entry.name in ignore:
            continue
        try:
            if entry.is_symlink() and not follow_symlinks:
                continue
            st = entry.stat(follow_symlinks=follow_symlinks)
        except OSError as e:
            logger.debug("cannot stat %s: %s", entry.path, e)
            continue
        if statmod.S_ISDIR(st.st_mode):
            out.append(DirectoryNode(name=entry.name, path=entry.path, size=0,
                                     modified_at=st.st_mtime))
        else:
            out.append(file_node(entry.name, entry.path, st))
    return out

def _media_roots() -> List[Tuple[str, str]]:
    if sys.platform == "darwin":
        return [("Volumes", "/Volumes")]
    if sys.platform.startswith("win"):
        return []
    user = os.environ.get("USER") or os.path.basename(os.path.expanduser("~"))
    return [("Media", "/media"), ("Media", os.path.join("/run/media", user))]

def candidate_directories() -> List[Tuple[str, str]]:
    home = os.path.expanduser("~")
    common = [
        ("Home", home),
        ("Desktop", os.path.join(home, "Desktop")),
        ("Documents", os.path.join(home, "Documents")),
        ("Downloads", os.path.join(home, "Downloads")),
    ]
    common.extend(_media_roots())
    try:
        for mp in removable_mountpoints():
            common.append((os.path.basename(mp.rstrip("\\/")) or mp, mp))
    except Exception as e:  # psutil backends raise platform-specific errors
        logger.debug("cannot enumerate removable volumes: %s", e)
    return common

def get_common_directories() -> List[DirectoryNode]:
    out: List[DirectoryNode] = []
    seen = set()
    for name, path in candidate_directories():
        path = os.path.abspath(path)
        if path in seen:
            continue
        try:
            st = os.stat(path)
        except OSError:
            continue
        if not statmod.S_ISDIR(st.st_mode):
            continue
        seen.add(path)
        out.append(DirectoryNode(name=name, path=path, size=0, modified_at=st.st_mtime))
    return out
