"""Shared fixtures for building directory trees on disk."""

import os

import pytest

MiB = 1024 * 1024


def make_file(path, size=0):
    """Create `path` with the given logical size (sparse, so large sizes are cheap)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    return path


def walk(node):
    """Yield every node of a scanned tree."""
    stack = [node]
    while stack:
        n = stack.pop()
        yield n
        stack.extend(getattr(n, "children", ()))


@pytest.fixture
def example_tree(tmp_path):
    """a.jpg (5 MiB), b.mp4 (20 MiB) and an ignored .git holding 100 MiB."""
    root = tmp_path / "root"
    make_file(root / "a.jpg", 5 * MiB)
    make_file(root / "b.mp4", 20 * MiB)
    make_file(root / ".git" / "objects" / "pack.bin", 100 * MiB)
    return root


@pytest.fixture
def mixed_tree(tmp_path):
    """A few levels of nested folders with files of several categories."""
    root = tmp_path / "mixed"
    make_file(root / "readme.md", 1200)
    make_file(root / "src" / "main.py", 3400)
    make_file(root / "src" / "lib" / "util.py", 800)
    make_file(root / "src" / "lib" / "data.JSON", 50)
    make_file(root / "media" / "song.mp3", 4 * MiB)
    make_file(root / "media" / "clips" / "intro.mov", 12 * MiB)
    make_file(root / "media" / "clips" / "outro.mkv", 30 * MiB)
    make_file(root / "backup" / "old.tar", 15 * MiB)
    make_file(root / "noext", 77)
    (root / "empty").mkdir()
    (root / "node_modules" / "pkg").mkdir(parents=True)
    make_file(root / "node_modules" / "pkg" / "index.js", 999)
    return root


@pytest.fixture
def deep_chain(tmp_path):
    """30 nested directories with one file at the very bottom."""
    root = tmp_path / "deep"
    cur = root
    for i in range(30):
        cur = cur / f"d{i}"
    make_file(cur / "bottom.txt", 10)
    return root


def depth_of(node, root_path):
    rel = os.path.relpath(node.path, root_path)
    return 0 if rel == "." else rel.count(os.sep) + 1
