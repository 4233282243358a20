from __future__ import annotations
import logging
import os
import stat as statmod
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Optional, Union
from .categories import classify, extension_of
from .models import DirectoryNode, FileNode, LargeFile, Node, ScanResult, ScanStats
from .topk import TopFiles

logger = logging.getLogger(__name__)

MAX_DEPTH = 20
TOP_FILES = 50
LARGE_FILE_FLOOR = 10 * 1024 * 1024
DEFAULT_WORKERS = min(32, (os.cpu_count() or 1) + 4)
PROGRESS_INTERVAL = 0.10

# build / version-control / cache / system directories
IGNORED_NAMES = frozenset({
    ".git", "node_modules", ".Trash", ".cache", "Library", "tmp", ".DS_Store", "System", "Volumes",
})

ProgressCb = Callable[[str, int, int, int], None]  # (current_path, files, dirs, bytes_scanned)
CancelCb = Callable[[], bool]

class CancelFlag:
    def __init__(self):
        self._cancel = threading.Event()

    def cancel(self):
        self._cancel.set()

    def __call__(self) -> bool:
        return self._cancel.is_set()

class _DirTask:
    """One directory waiting to be listed, or waiting for its subdirectories."""

    __slots__ = ("name", "path", "modified_at", "depth", "parent", "entries",
                 "pending", "node", "started_at", "abandoned", "committed")

    def __init__(self, name: str, path: str, modified_at: float, depth: int,
                 parent: Optional["_DirTask"] = None):
        self.name = name
        self.path = path
        self.modified_at = modified_at
        self.depth = depth
        self.parent = parent
        self.entries: List[Union[FileNode, "_DirTask"]] = []
        self.pending = 0
        self.node: Optional[DirectoryNode] = None
        self.started_at: Optional[float] = None
        self.abandoned = False
        self.committed = False

class AggregationContext:
    """Scan-wide accumulator shared by every worker; all mutations hold the lock."""

    def __init__(self, top_files: int = TOP_FILES, large_file_floor: int = LARGE_FILE_FLOOR):
        self._lock = threading.Lock()
        self.file_count = 0
        self.dir_count = 0
        self.skipped = 0
        self.bytes_scanned = 0
        self.category_totals: Dict[str, int] = {}
        self.largest_files = TopFiles(top_files, large_file_floor)

    def _add_file(self, node: FileNode):
        self.file_count += 1
        self.bytes_scanned += node.size
        label = node.category.value
        self.category_totals[label] = self.category_totals.get(label, 0) + node.size
        self.largest_files.offer(LargeFile(name=node.name, path=node.path, size=node.size,
                                           category=node.category, modified_at=node.modified_at))

    def add_file(self, node: FileNode):
        with self._lock:
            self._add_file(node)

    def add_dir(self):
        with self._lock:
            self.dir_count += 1

    def commit(self, task: _DirTask, entries: List[Union[FileNode, _DirTask]], skipped: int) -> bool:
        """Publish a finished listing unless the coordinator gave up on it."""
        with self._lock:
            if task.abandoned:
                return False
            for e in entries:
                if isinstance(e, FileNode):
                    self._add_file(e)
            self.skipped += skipped
            task.entries = entries
            task.committed = True
            return True

    def abandon(self, task: _DirTask) -> bool:
        with self._lock:
            if task.committed:
                return False
            task.abandoned = True
            self.skipped += 1
            return True

    def progress(self):
        with self._lock:
            return self.file_count, self.dir_count, self.bytes_scanned

    def freeze(self, root: Node) -> ScanStats:
        with self._lock:
            breakdown = dict(sorted(self.category_totals.items(), key=lambda kv: (-kv[1], kv[0])))
            return ScanStats(
                total_size=root.size,
                file_count=self.file_count,
                category_breakdown=MappingProxyType(breakdown),
                largest_files=tuple(self.largest_files.sorted()),
                dir_count=self.dir_count,
                skipped=self.skipped,
            )

def file_node(name: str, path: str, st: os.stat_result) -> FileNode:
    ext = extension_of(name)
    return FileNode(name=name, path=path, size=int(getattr(st, "st_size", 0) or 0),
                    modified_at=st.st_mtime, extension=ext, category=classify(ext))

class TreeScanner:
    def __init__(self,
                 max_depth: int = MAX_DEPTH,
                 ignore: Iterable[str] = IGNORED_NAMES,
                 follow_symlinks: bool = False,
                 max_workers: Optional[int] = None,
                 top_files: int = TOP_FILES,
                 large_file_floor: int = LARGE_FILE_FLOOR,
                 entry_timeout: Optional[float] = None,
                 progress: Optional[ProgressCb] = None,
                 cancel_flag: Optional[CancelCb] = None):
        self.max_depth = max_depth
        self.ignore = frozenset(ignore)
        self.follow_symlinks = follow_symlinks
        self.max_workers = max_workers or DEFAULT_WORKERS
        self.top_files = top_files
        self.large_file_floor = large_file_floor
        self.entry_timeout = entry_timeout
        self.progress = progress
        self.cancel_flag = cancel_flag
        self._last_emit = 0.0

    def _cancelled(self) -> bool:
        return bool(self.cancel_flag and self.cancel_flag())

    def _emit(self, ctx: AggregationContext, cur: str, force: bool = False):
        if not self.progress:
            return
        now = time.monotonic()
        if force or now - self._last_emit >= PROGRESS_INTERVAL:
            self._last_emit = now
            files, dirs, bytes_scanned = ctx.progress()
            self.progress(cur, files, dirs, bytes_scanned)

    def scan(self, root_path: str) -> Optional[ScanResult]:
        t0 = time.time()
        root_path = os.path.abspath(root_path)
        try:
            st = os.stat(root_path)
        except OSError as e:
            logger.info("root not found: %s (%s)", root_path, e)
            return None

        name = os.path.basename(root_path.rstrip("\\/")) or root_path
        ctx = AggregationContext(self.top_files, self.large_file_floor)
        self._last_emit = 0.0

        if statmod.S_ISDIR(st.st_mode):
            root: Node = self._walk(_DirTask(name, root_path, st.st_mtime, 0), ctx)
        else:
            root = file_node(name, root_path, st)
            ctx.add_file(root)

        self._emit(ctx, root_path, force=True)
        stats = ctx.freeze(root)
        logger.info("scanned %s: %d files, %d dirs, %d bytes, %d skipped in %.2fs",
                 root_path, stats.file_count, stats.dir_count, stats.total_size,
                 stats.skipped, time.time() - t0)
        return ScanResult(root=root, stats=stats)

    # -------------------- worker side --------------------
    def _read_dir(self, task: _DirTask, ctx: AggregationContext):
        task.started_at = time.monotonic()
        entries: List[Union[FileNode, _DirTask]] = []
        skipped = 0

        if self._cancelled():
            ctx.commit(task, entries, skipped)
            return

        try:
            with os.scandir(task.path) as it:
                listing = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug("cannot list %s: %s", task.path, e)
            ctx.commit(task, entries, 1)
            return

        for entry in listing:
            if self._cancelled():
                break
            if entry.name in self.ignore:
                continue
            try:
                if entry.is_symlink() and not self.follow_symlinks:
                    continue
                st = entry.stat(follow_symlinks=self.follow_symlinks)
            except OSError as e:
                logger.debug("cannot stat %s: %s", entry.path, e)
                skipped += 1
                continue

            if statmod.S_ISDIR(st.st_mode):
                if task.depth + 1 > self.max_depth:
                    logger.debug("depth cap reached, dropping %s", entry.path)
                    continue
                entries.append(_DirTask(entry.name, entry.path, st.st_mtime, task.depth + 1, task))
            else:
                entries.append(file_node(entry.name, entry.path, st))

        ctx.commit(task, entries, skipped)

    # -------------------- coordinator side --------------------
    def _walk(self, root: _DirTask, ctx: AggregationContext) -> DirectoryNode:
        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="diskscope")
        in_flight: Dict[Future, _DirTask] = {}
        stuck: List[Future] = []  # abandoned listings still holding a worker

        def submit(task: _DirTask):
            if self._cancelled():
                self._listed(task, ctx, submit)
                return
            in_flight[executor.submit(self._read_dir, task, ctx)] = task

        poll = PROGRESS_INTERVAL if (self.progress or self.entry_timeout) else None
        try:
            submit(root)
            while in_flight:
                done, _ = wait(list(in_flight), timeout=poll, return_when=FIRST_COMPLETED)
                for fut in done:
                    task = in_flight.pop(fut)
                    fut.result()
                    self._emit(ctx, task.path)
                    self._listed(task, ctx, submit)
                if self.entry_timeout:
                    stuck.extend(self._expire(in_flight, ctx, submit))
                    stuck = [f for f in stuck if not f.done()]
                    if len(stuck) >= self.max_workers:
                        self._drop_queued(in_flight, ctx, submit)
        finally:
            executor.shutdown(wait=not stuck, cancel_futures=True)

        assert root.node is not None
        return root.node

    def _give_up(self, fut: Future, in_flight: Dict[Future, _DirTask], ctx: AggregationContext, submit):
        task = in_flight.pop(fut)
        task.entries = []
        self._listed(task, ctx, submit)

    def _expire(self, in_flight: Dict[Future, _DirTask], ctx: AggregationContext, submit) -> List[Future]:
        now = time.monotonic()
        expired: List[Future] = []
        for fut, task in list(in_flight.items()):
            if task.started_at is None or now - task.started_at < self.entry_timeout:
                continue
            if not ctx.abandon(task):
                continue
            logger.debug("listing %s timed out after %.1fs", task.path, self.entry_timeout)
            expired.append(fut)
            self._give_up(fut, in_flight, ctx, submit)
        return expired

    def _drop_queued(self, in_flight: Dict[Future, _DirTask], ctx: AggregationContext, submit):
        # every worker is blocked in a timed-out call, so queued listings would
        # only start once one of those returns
        for fut, task in list(in_flight.items()):
            if not fut.cancel():
                continue
            if not ctx.abandon(task):
                continue
            logger.debug("pool saturated by timed-out listings, dropping %s", task.path)
            self._give_up(fut, in_flight, ctx, submit)

    def _listed(self, task: _DirTask, ctx: AggregationContext, submit):
        subdirs = [e for e in task.entries if isinstance(e, _DirTask)]
        task.pending = len(subdirs)
        if not subdirs:
            self._finish(task, ctx)
            return
        for child in subdirs:
            submit(child)

    def _finish(self, task: _DirTask, ctx: AggregationContext):
        # walk up while each parent's last pending subdirectory completes
        cur: Optional[_DirTask] = task
        while cur is not None:
            children = tuple(e.node if isinstance(e, _DirTask) else e for e in cur.entries)
            cur.node = DirectoryNode(name=cur.name, path=cur.path,
                                     size=sum(c.size for c in children),
                                     modified_at=cur.modified_at, children=children)
            cur.entries = []
            ctx.add_dir()
            parent = cur.parent
            cur.parent = None
            if parent is None:
                break
            parent.pending -= 1
            cur = parent if parent.pending == 0 else None

def scan(root_path: str,
         progress: Optional[ProgressCb] = None,
         cancel_flag: Optional[CancelCb] = None,
         **options) -> Optional[ScanResult]:
    """Scan `root_path` into a size-annotated tree plus aggregate stats.

    Returns None when the root itself cannot be stat'ed. Every other
    filesystem failure is absorbed: the offending entry is left out and
    counted in `stats.skipped`. Keyword options are those of TreeScanner.
    """
    return TreeScanner(progress=progress, cancel_flag=cancel_flag, **options).scan(root_path)
