import argparse
import sys

from folio.cmd import cmd_fonts_clear, cmd_fonts_list, cmd_resume, cmd_themes
from folio.resume.cache import FOLIO_FONTS_DIR
from folio.resume.fonts import DEFAULT_TIMEOUT
from folio.resume.themes import theme_names


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render resumes with mixed-script text to PDF.")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    resume_parser = subparsers.add_parser("resume", help="Convert a JSON/YAML resume to PDF")
    resume_parser.add_argument("input", help="Resume file (.json, .yaml or .yml)")
    resume_parser.add_argument(
        "-o", "--output", help="Output PDF path (default: input name with .pdf)"
    )
    resume_parser.add_argument(
        "-t",
        "--theme",
        default="modern",
        choices=theme_names(),
        help="Layout theme (default: modern)",
    )
    resume_parser.add_argument(
        "-f", "--font", help="Font family for Latin text (default: the theme's)"
    )
    resume_parser.add_argument(
        "-s", "--size", default="A4", help="Page size, A4 or Letter (default: A4)"
    )
    resume_parser.add_argument("--profile", help="Profile file with fallback details")
    resume_parser.add_argument(
        "--offline", action="store_true", help="Never download fonts"
    )
    resume_parser.add_argument(
        "--cache-dir",
        default=str(FOLIO_FONTS_DIR),
        help=f"Font cache directory (default: {FOLIO_FONTS_DIR})",
    )
    resume_parser.add_argument(
        "--subset-fonts",
        action="store_true",
        help="Key cached fonts by the resume's character set",
    )
    resume_parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Font download timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
    )
    resume_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )

    fonts_parser = subparsers.add_parser("fonts", help="Font operations")
    fonts_subparsers = fonts_parser.add_subparsers(dest="fonts_command", help="Font commands")

    fonts_list = fonts_subparsers.add_parser("list", help="List font families and cache")
    fonts_list.add_argument(
        "--cache-dir", default=str(FOLIO_FONTS_DIR), help="Font cache directory"
    )
    fonts_list.add_argument(
        "-v", "--verbose", action="store_true", help="Also scan system font directories"
    )

    fonts_clear = fonts_subparsers.add_parser("clear", help="Clear the font cache")
    fonts_clear.add_argument(
        "--cache-dir", default=str(FOLIO_FONTS_DIR), help="Font cache directory"
    )

    themes_parser = subparsers.add_parser("themes", help="List available themes")
    themes_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show theme details"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "resume":
        return cmd_resume(args)
    elif args.command == "fonts":
        if args.fonts_command == "list":
            return cmd_fonts_list(args)
        elif args.fonts_command == "clear":
            return cmd_fonts_clear(args)
        else:
            parser.print_help()
            return 1
    elif args.command == "themes":
        return cmd_themes(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
