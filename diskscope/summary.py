from __future__ import annotations
import heapq
import json
from dataclasses import asdict, fields
from typing import Any, Dict, List, Tuple
from .models import DirectoryNode, Node, NodeKind, ScanResult, ScanStats

def top_children(node: Node, limit: int = 10) -> List[Node]:
    if node.kind is not NodeKind.DIRECTORY:
        return []
    kids = [c for c in node.children if c.size > 0]
    kids.sort(key=lambda n: (-n.size, n.name))
    return kids[:limit]

def top_folders(root: Node, limit: int = 50) -> List[Tuple[int, str]]:
    """Largest directories anywhere below `root`, as (bytes, path) sorted desc."""
    heap: List[Tuple[int, str]] = []
    stack: List[Node] = [root]
    while stack:
        n = stack.pop()
        if not isinstance(n, DirectoryNode):
            continue
        stack.extend(n.children)
        if n is root or n.size <= 0:
            continue
        heapq.heappush(heap, (n.size, n.path))
        if len(heap) > limit:
            heapq.heappop(heap)
    return sorted(heap, key=lambda x: (-x[0], x[1]))

def stats_to_dict(stats: ScanStats) -> Dict[str, Any]:
    data = {f.name: getattr(stats, f.name) for f in fields(stats)}
    data["category_breakdown"] = dict(stats.category_breakdown)
    data["largest_files"] = [asdict(f) for f in stats.largest_files]
    return data

def result_to_dict(result: ScanResult, include_tree: bool = True) -> Dict[str, Any]:
    data = {"stats": stats_to_dict(result.stats)}
    if include_tree:
        data["root"] = asdict(result.root)
    return data

def result_to_json(result: ScanResult, include_tree: bool = True, indent: int = 2) -> str:
    return json.dumps(result_to_dict(result, include_tree), ensure_ascii=False, indent=indent)
