"""Parse free-text word lists into items with hiragana readings.

Accepted line formats::

    視点=してん        (full-width ＝ also works)
    教科書（きょうかしょ）
    海底 かいてい      (last whitespace-separated token is the reading)
"""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path

from models import CrosswordError, Item

_PAREN_RE = re.compile(r"^(.+?)[(（]([ぁ-んァ-ンー]+)[)）]$")

_KATAKANA_FIRST, _KATAKANA_LAST = 0x30A1, 0x30F6
_HALFWIDTH_FIRST, _HALFWIDTH_LAST = 0xFF66, 0xFF9D
_KANA_SHIFT = 0x60


def to_hiragana(text: str) -> str:
    """Fold katakana (full- and half-width) onto hiragana; leave other characters alone."""
    out = []
    for ch in text:
        code = ord(ch)
        if _KATAKANA_FIRST <= code <= _KATAKANA_LAST:
            out.append(chr(code - _KANA_SHIFT))
        elif _HALFWIDTH_FIRST <= code <= _HALFWIDTH_LAST:
            out.append(to_hiragana(unicodedata.normalize("NFKC", ch)))
        else:
            out.append(ch)
    return "".join(out)


def parse_line(line: str) -> tuple[str, str]:
    """Split one trimmed line into ``(display, raw_reading)``."""
    m = _PAREN_RE.match(line)
    if m:
        return m.group(1).strip(), m.group(2).strip()
    if "=" in line:
        parts = line.split("=")
        return parts[0].strip(), parts[1].strip()
    parts = line.split()
    if len(parts) >= 2:
        return " ".join(parts[:-1]), parts[-1]
    return line, ""


def parse_items(text: str) -> tuple[list[Item], list[str]]:
    """Parse *text* into items (ids ``w0``, ``w1``, ...) and per-line warnings.

    Items whose reading is empty are still returned, with a warning; use
    :func:`usable_items` before laying them out.
    """
    normalized = text.replace("＝", "=")
    lines = [s.strip() for s in normalized.splitlines()]
    lines = [s for s in lines if s]

    items: list[Item] = []
    warnings: list[str] = []
    for i, line in enumerate(lines):
        display, raw_reading = parse_line(line)
        reading = to_hiragana(raw_reading)
        if not reading:
            warnings.append(f"行{i + 1}: 「{display}」の読みが未指定です（例: {display}=かな）")
        items.append(Item(id=f"w{i}", display=display, reading=reading))
    return items, warnings


def usable_items(items: list[Item]) -> list[Item]:
    return [item for item in items if item.reading]


def read_items(path: str | Path) -> tuple[list[Item], list[str]]:
    """Read a UTF-8 word list file and parse it."""
    path = Path(path)
    if not path.exists():
        raise CrosswordError(f"File not found: {path}")
    return parse_items(path.read_text(encoding="utf-8"))
