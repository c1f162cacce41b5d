"""Font inspection and cache maintenance commands."""

import argparse
from pathlib import Path

from folio.shared import Color, echo
from folio.resume.cache import FontCache
from folio.resume.fonts import (
    BUNDLED_FONT_DIRS,
    FONT_FAMILIES,
    Weight,
    find_cjk_fonts_in_dirs,
    get_system_cjk_font_paths,
    get_system_font_dirs,
)


def _bundled(file_name: str) -> Path | None:
    for font_dir in BUNDLED_FONT_DIRS:
        path = font_dir / file_name
        if path.is_file():
            return path
    return None


def cmd_fonts_list(args: argparse.Namespace) -> int:
    """Show known families, detected CJK system fonts and cache entries."""
    echo("Font families:", Color.INFO)
    for spec in FONT_FAMILIES.values():
        available = all(_bundled(spec.source(w)) for w in Weight)
        scripts = ", ".join(sorted(s.value for s in spec.scripts))
        status = "bundled" if available else "download"
        echo(f"  {spec.name:<14} {spec.display_name:<22} [{status}] {scripts}", Color.INFO)

    system_fonts = [p for p in get_system_cjk_font_paths() if p.is_file()]
    if args.verbose:
        system_fonts += find_cjk_fonts_in_dirs(get_system_font_dirs())
    echo("System CJK fonts:", Color.INFO)
    if not system_fonts:
        echo("  none detected", Color.WARNING)
    for path in dict.fromkeys(system_fonts):
        echo(f"  {path}", Color.SUCCESS)

    cache = FontCache(Path(args.cache_dir))
    entries = cache.entries()
    echo(f"Cached fonts ({cache.root}):", Color.INFO)
    if not entries:
        echo("  empty", Color.INFO)
    for key in entries:
        echo(f"  {key}", Color.INFO)
    return 0


def cmd_fonts_clear(args: argparse.Namespace) -> int:
    """Remove every cached font program."""
    cache = FontCache(Path(args.cache_dir))
    try:
        count = cache.clear()
    except OSError as e:
        echo(f"Failed to clear font cache: {e}", Color.ERROR)
        return 1

    echo(f"Removed {count} cached font(s) from {cache.root}", Color.SUCCESS)
    return 0
