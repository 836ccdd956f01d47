"""
Page data models for paginated replies.

A PageSet is produced once per command invocation and handed to the delivery
layer, which either sends its single page directly or wraps it in a paginator.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PageField:
    """Inline embed field (name/value pair)."""
    name: str
    value: str
    inline: bool = True


@dataclass(frozen=True)
class Page:
    """Single presentable unit: a title and a size-bounded body."""
    title: str
    body: str = ''
    fields: Tuple[PageField, ...] = ()
    color: Optional[int] = None


PageSet = Tuple[Page, ...]
