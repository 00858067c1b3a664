"""Stylesheets for the built-in loading indicators."""

import re
from typing import Tuple

from scrollfeed.config.settings import IndicatorSettings

INDICATOR_CLASS = "inf-loading-indicator"

CUSTOM = 0
CIRCLE = 1
DOTS = 2

_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?)([a-z%]+)$")


def split_size(size: str) -> Tuple[float, str]:
    """Split ``'0.7em'`` into ``(0.7, 'em')``."""
    match = _SIZE_RE.match(size.strip())
    if not match:
        raise ValueError(f"Invalid size: {size!r}")
    return float(match.group(1)), match.group(2)


def _scaled(size: str, factor: float) -> str:
    value, unit = split_size(size)
    return f"{round(value * factor, 3):g}{unit}"


def _circle_css(color: str, size: str) -> str:
    diameter = _scaled(size, 1.428)
    return f"""
.{INDICATOR_CLASS} {{
    color: {color};
    margin: {_scaled(size, 10)};
    min-width: {diameter};
    min-height: {diameter};
    border-radius: 50%;
    border: {_scaled(size, 0.2)} solid {color};
    border-top-color: transparent;
    animation: inf-spin 1.3s infinite linear;
}}
@keyframes inf-spin {{
    from {{ transform: rotate(0deg); }}
    to {{ transform: rotate(360deg); }}
}}
"""


def _dots_css(color: str, size: str) -> str:
    return f"""
.{INDICATOR_CLASS} {{
    min-width: {_scaled(size, 4.7)};
    min-height: {_scaled(size, 5)};
}}
.{INDICATOR_CLASS} .inf-dot {{
    margin-top: {_scaled(size, 2)};
    min-width: {size};
    min-height: {size};
    border-radius: 50%;
    background: {color};
}}
.{INDICATOR_CLASS} .inf-dot:nth-child(1) {{
    margin-left: {_scaled(size, 0.44)};
    animation: inf-dot-grow 0.6s infinite;
}}
.{INDICATOR_CLASS} .inf-dot:nth-child(2) {{
    margin-left: {_scaled(size, 0.44)};
    animation: inf-dot-move 0.6s infinite;
}}
.{INDICATOR_CLASS} .inf-dot:nth-child(3) {{
    margin-left: {_scaled(size, 1.77)};
    animation: inf-dot-move 0.6s infinite;
}}
.{INDICATOR_CLASS} .inf-dot:nth-child(4) {{
    margin-left: {_scaled(size, 3.11)};
    animation: inf-dot-shrink 0.6s infinite;
}}
@keyframes inf-dot-grow {{
    from {{ transform: scale(0); }}
    to {{ transform: scale(1); }}
}}
@keyframes inf-dot-shrink {{
    from {{ transform: scale(1); }}
    to {{ transform: scale(0); }}
}}
@keyframes inf-dot-move {{
    from {{ transform: translate(0, 0); }}
    to {{ transform: translate({_scaled(size, 1.33)}, 0); }}
}}
"""


def build_indicator_css(indicator: IndicatorSettings) -> str:
    """Build the stylesheet for the configured indicator type.

    Custom indicators bring their own styling, so type 0 yields no CSS.
    """
    if indicator.type == CUSTOM:
        return ""
    if indicator.type == DOTS:
        return _dots_css(indicator.color, indicator.size)
    return _circle_css(indicator.color, indicator.size)
