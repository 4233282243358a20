from __future__ import annotations

UNITS = ("B", "KB", "MB", "GB", "TB", "PB")

def format_bytes(num: int, precision: int = 2) -> str:
    if num < 0:
        return str(num)
    if num < 1024:
        return f"{int(num)} B"
    x = float(num)
    i = 0
    while x >= 1024.0 and i < len(UNITS) - 1:
        x /= 1024.0
        i += 1
    return f"{x:.{precision}f} {UNITS[i]}"

def format_share(part: int, total: int) -> str:
    """Share of `total` taken by `part` as a percentage; an empty total reads 0.0%."""
    if total <= 0:
        return "0.0%"
    return f"{part * 100.0 / total:.1f}%"

def parse_size(size_str: str) -> int:
    """Parse '10MB', '1.5GB', '512' (bytes) into a byte count.

    Raises ValueError on anything else.
    """
    if not size_str:
        return 0
    s = size_str.strip().upper()
    try:
        return int(float(s))
    except ValueError:
        pass
    for i in range(len(UNITS) - 1, -1, -1):
        unit = UNITS[i]
        if s.endswith(unit):
            try:
                return int(float(s[: -len(unit)].strip()) * 1024**i)
            except ValueError:
                continue
    raise ValueError(f"Invalid size format: '{size_str}'. Use e.g. '100MB', '1.5GB' or plain bytes.")
