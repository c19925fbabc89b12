"""Text renderings of list contents.

Both helpers take the snapshot produced by ``SequentialList.to_array()``.
"""
from typing import Any, Sequence


def render_braced(entries: Sequence[Any]) -> str:
    """Render ``entries`` on one line as ``{ <a> <b> <c> }``."""
    inner = "".join(f"<{entry}> " for entry in entries)
    return "{ " + inner + "}"


def render_indexed(entries: Sequence[Any]) -> str:
    """Render ``entries`` one per line, prefixed by their 1-based position."""
    return "\n".join(f"{index}: {entry}" for index, entry in enumerate(entries, start=1))
