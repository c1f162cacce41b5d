"""Theme listing command."""

import argparse

from folio.shared import Color, echo
from folio.resume.themes import THEMES


def cmd_themes(args: argparse.Namespace) -> int:
    echo("Available themes:", Color.INFO)
    for name, theme in THEMES.items():
        echo(f"  {name.value:<14} {theme.description}", Color.INFO)
        if args.verbose:
            family = theme.font_family or "default"
            echo(
                f"    decoration={theme.decoration.value} header={theme.header_style.value} "
                f"font={family}",
                Color.INFO,
            )
    return 0
