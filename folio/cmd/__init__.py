"""Command implementations for the folio CLI."""

from folio.cmd.fonts import cmd_fonts_clear, cmd_fonts_list
from folio.cmd.resume import cmd_resume
from folio.cmd.themes import cmd_themes

__all__ = [
    "cmd_resume",
    "cmd_fonts_list",
    "cmd_fonts_clear",
    "cmd_themes",
]
