from typing import List

TRIGGER_SEGMENT = "trigger"

def parse_targets(path: str) -> List[str]:
    """Return the target labels following the `trigger` segment of a URL path."""
    parts = path.strip("/").lower().split("/")
    if TRIGGER_SEGMENT not in parts:
        return []

    trigger_index = parts.index(TRIGGER_SEGMENT)
    return [part for part in parts[trigger_index + 1:] if part.strip()]
