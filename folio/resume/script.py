"""Unicode script classification for mixed-script text.

Codepoints are bucketed by fixed block ranges; adjacent codepoints of the
same bucket form a run, and each run is drawn with one font.
"""

from dataclasses import dataclass
from enum import Enum


class Script(str, Enum):
    LATIN = "latin"
    CJK = "cjk"
    HANGUL = "hangul"
    KANA = "kana"
    OTHER = "other"


# (first, last, script), inclusive, checked in order.
SCRIPT_RANGES: tuple[tuple[int, int, Script], ...] = (
    (0x4E00, 0x9FFF, Script.CJK),
    (0x3400, 0x4DBF, Script.CJK),
    (0x3000, 0x303F, Script.CJK),
    (0xFF00, 0xFFEF, Script.CJK),
    (0x3040, 0x309F, Script.KANA),
    (0x30A0, 0x30FF, Script.KANA),
    (0xAC00, 0xD7AF, Script.HANGUL),
    (0x0000, 0x024F, Script.LATIN),
    (0x1E00, 0x1EFF, Script.LATIN),
    (0x2000, 0x206F, Script.LATIN),
)

CJK_SCRIPTS = frozenset({Script.CJK, Script.KANA, Script.HANGUL})


@dataclass(frozen=True)
class ScriptRun:
    """Maximal substring whose codepoints share one script."""

    script: Script
    text: str


def classify(char: str) -> Script:
    cp = ord(char)
    for first, last, script in SCRIPT_RANGES:
        if first <= cp <= last:
            return script
    return Script.OTHER


def needs_cjk(script: Script) -> bool:
    return script in CJK_SCRIPTS


def has_cjk(text: str) -> bool:
    """True when any codepoint falls in an ideograph, kana or hangul range."""
    return any(needs_cjk(classify(ch)) for ch in text)


def has_ideographs(text: str) -> bool:
    return any(0x4E00 <= ord(ch) <= 0x9FFF for ch in text)


def segment(text: str) -> list[ScriptRun]:
    """Split text into ordered script runs.

    ``"".join(run.text for run in segment(s)) == s`` for every ``s``.
    """
    runs: list[ScriptRun] = []
    if not text:
        return runs

    current = classify(text[0])
    start = 0
    for i in range(1, len(text)):
        script = classify(text[i])
        if script != current:
            runs.append(ScriptRun(current, text[start:i]))
            current = script
            start = i
    runs.append(ScriptRun(current, text[start:]))
    return runs


def unique_characters(*texts: str) -> frozenset[str]:
    """Printable ASCII plus every character in ``texts``."""
    chars = {chr(cp) for cp in range(32, 127)}
    for text in texts:
        chars.update(text)
    return frozenset(chars)
