"""
Text helpers for rendering Hypixel stats as Discord markdown.
"""

import json
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from hypepulse.constants import UIConstants

Number = Union[int, float]


def split_text(text: str, max_length: int) -> List[str]:
    """Split ``text`` into chunks of at most ``max_length`` characters.

    Cuts at fixed offsets, so words and markdown may be split across chunks.
    Joining the chunks gives back ``text`` exactly.
    """
    if max_length <= 0:
        raise ValueError("max_length must be positive")
    return [text[i:i + max_length] for i in range(0, len(text), max_length)]


def ratio(numerator: Optional[Number], denominator: Optional[Number]) -> Optional[Union[str, Number]]:
    """Kill/death style ratio.

    With a positive denominator the result is the quotient as a 2-decimal string.
    Otherwise the numerator is returned unchanged (None stays None and is left
    out of the rendered section).
    """
    if isinstance(denominator, (int, float)) and not isinstance(denominator, bool) and denominator > 0:
        return f"{(numerator or 0) / denominator:.2f}"
    return numerator


def render_value(value: Any) -> str:
    """Render a stat value: nested values as indented JSON, scalars as-is."""
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False)
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_section(title: str, data: Mapping[str, Any]) -> str:
    """Bold title followed by one ``**key:** value`` line per non-null entry."""
    section = f"**{title}:**\n"
    for key, value in data.items():
        if value is not None:
            section += f"**{key}:** {render_value(value)}\n"
    return section


def format_date(epoch_millis: Optional[Number]) -> str:
    """Format a Hypixel millisecond timestamp as M/D/YYYY (UTC)."""
    if not epoch_millis:
        return UIConstants.NOT_AVAILABLE
    moment = datetime.fromtimestamp(epoch_millis / 1000, tz=timezone.utc)
    return f"{moment.month}/{moment.day}/{moment.year}"
