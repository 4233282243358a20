from __future__ import annotations
import os
from dataclasses import dataclass
from typing import List
import psutil

# roots under which desktop environments mount USB sticks, SD cards, etc.
REMOVABLE_ROOTS = ("/Volumes/", "/media/", "/run/media/", "/mnt/")

@dataclass
class Drive:
    mountpoint: str
    fstype: str
    total: int
    used: int
    free: int
    percent: float
    removable: bool = False

def _is_removable(part) -> bool:
    opts = (part.opts or "").lower().split(",")
    if "removable" in opts or "cdrom" in opts:
        return True
    mp = part.mountpoint.rstrip("/") + "/"
    return any(mp.startswith(r) for r in REMOVABLE_ROOTS)

def list_drives() -> List[Drive]:
    drives: List[Drive] = []
    seen = set()
    for p in psutil.disk_partitions(all=False):
        mp = p.mountpoint
        if not mp:
            continue
        mp_norm = os.path.abspath(mp)
        if mp_norm in seen:
            continue
        seen.add(mp_norm)
        try:
            u = psutil.disk_usage(mp_norm)
        except OSError:
            continue
        drives.append(Drive(
            mountpoint=mp_norm,
            fstype=p.fstype,
            total=int(u.total),
            used=int(u.used),
            free=int(u.free),
            percent=float(u.percent),
            removable=_is_removable(p),
        ))
    drives.sort(key=lambda d: d.mountpoint.lower())
    return drives

def removable_mountpoints() -> List[str]:
    out: List[str] = []
    try:
        parts = psutil.disk_partitions(all=False)
    except OSError:
        return out
    for p in parts:
        if p.mountpoint and _is_removable(p):
            mp = os.path.abspath(p.mountpoint)
            if mp not in out:
                out.append(mp)
    out.sort()
    return out
