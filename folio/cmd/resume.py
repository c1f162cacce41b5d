"""Resume to PDF conversion command."""

import argparse
import json
from pathlib import Path

import yaml

from folio.shared import Color, InvalidResumeError, PaperSize, ThemeNotFoundError, echo
from folio.resume import RenderConfig, ResumeGenerator, load_profile, parse_resume


def _load_resume_data(input_path: Path) -> dict | None:
    suffix = input_path.suffix.lower()

    try:
        with open(input_path, encoding="utf-8") as f:
            if suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except json.JSONDecodeError as e:
        echo(f"Invalid JSON: {e}", Color.ERROR)
    except yaml.YAMLError as e:
        echo(f"Invalid YAML: {e}", Color.ERROR)
    return None


def _report_invalid(error: InvalidResumeError) -> int:
    echo("Resume validation failed:", Color.ERROR)
    for detail in error.details:
        echo(f"  {detail}", Color.ERROR)
    return 1


def cmd_resume(args: argparse.Namespace) -> int:
    """Handle resume to PDF conversion."""
    input_path = Path(args.input)

    if not input_path.exists():
        echo(f"Input file not found: {input_path}", Color.ERROR)
        return 1

    if input_path.suffix.lower() not in (".json", ".yaml", ".yml"):
        echo("Unsupported file format. Use .json or .yaml", Color.ERROR)
        return 1

    data = _load_resume_data(input_path)
    if data is None:
        return 1

    try:
        paper_size = PaperSize.from_string(args.size)
    except ValueError as e:
        echo(str(e), Color.ERROR)
        return 1

    try:
        resume = parse_resume(data)
        profile = load_profile(Path(args.profile)) if args.profile else None
    except InvalidResumeError as e:
        return _report_invalid(e)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        echo(f"Could not read profile: {e}", Color.ERROR)
        return 1

    config = RenderConfig(
        paper_size=paper_size,
        font_family=args.font,
        cache_dir=Path(args.cache_dir),
        offline=args.offline,
        timeout=args.timeout,
        subset_fonts=args.subset_fonts,
        verbose=args.verbose,
    )
    output = Path(args.output) if args.output else input_path.with_suffix(".pdf")

    try:
        ResumeGenerator(config).generate(resume, output, theme=args.theme, profile=profile)
    except ThemeNotFoundError as e:
        echo(str(e), Color.ERROR)
        return 1
    except Exception as e:
        echo(f"PDF generation failed: {e}", Color.ERROR)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    echo(f"Resume PDF created: {output}", Color.SUCCESS)
    return 0
