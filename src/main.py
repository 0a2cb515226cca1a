# src/main.py - v3
"""CLI entry point: generate, classify and cache commands.

Usage:
    medsite generate <file|-> [options]
    medsite classify <text>
    medsite cache stats
    medsite cache clear [--region REGION]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from medsite.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        _setup_logging(args.verbose)
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def cli() -> None:
    """Console-script wrapper around main()."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="medsite",
        description=f"medsite v{__version__} - Medical practice website generator",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- generate ---
    p_generate = subparsers.add_parser(
        "generate", help="Generate a website from a practice description",
    )
    p_generate.add_argument(
        "file", help="Text file with the practice description, or '-' for stdin",
    )
    p_generate.add_argument(
        "--specialty", default=None,
        help="Medical specialty (detected from the description if omitted)",
    )
    p_generate.add_argument(
        "--customizations", default=None,
        help="Customizations as a JSON object or a path to a JSON file",
    )
    p_generate.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the HTML page here (default: stdout)",
    )
    p_generate.add_argument(
        "--fresh", action="store_true",
        help="Ignore cached content for this request",
    )
    p_generate.add_argument(
        "--json", action="store_true",
        help="Print the full result as JSON instead of HTML",
    )
    p_generate.set_defaults(func=_cmd_generate)

    # --- classify ---
    p_classify = subparsers.add_parser(
        "classify", help="Detect the medical specialty of a description",
    )
    p_classify.add_argument("text", help="Practice description")
    p_classify.set_defaults(func=_cmd_classify)

    # --- cache ---
    p_cache = subparsers.add_parser("cache", help="Inspect or clear the generation cache")
    cache_sub = p_cache.add_subparsers(dest="cache_command")

    p_stats = cache_sub.add_parser("stats", help="Show entries per cache region")
    p_stats.set_defaults(func=_cmd_cache_stats)

    p_clear = cache_sub.add_parser("clear", help="Clear one or all cache regions")
    p_clear.add_argument(
        "--region", choices=["classification", "content", "templates"], default=None,
        help="Region to clear (default: all)",
    )
    p_clear.set_defaults(func=_cmd_cache_clear)

    return parser


def _read_description(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def _load_customizations(value: str | None) -> dict | None:
    if not value:
        return None
    path = Path(value)
    text = path.read_text(encoding="utf-8") if path.is_file() else value
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Customizations must be a JSON object")
    return data


async def _cmd_generate(args: argparse.Namespace) -> int:
    """Run the full generation pipeline."""
    from medsite.api.facade import generate_website

    try:
        raw_text = _read_description(args.file)
        customizations = _load_customizations(args.customizations)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    result = await generate_website(
        raw_text,
        specialty=args.specialty,
        customizations=customizations,
        fresh=args.fresh,
    )

    output = result.model_dump_json(indent=2) if args.json else result.html
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output, encoding="utf-8")
        _print_result_summary(result, args.output)
    else:
        sys.stdout.write(output)
        if not output.endswith("\n"):
            sys.stdout.write("\n")
    return 0


async def _cmd_classify(args: argparse.Namespace) -> int:
    """Classify a description and print the decision."""
    from medsite.api.facade import build_pipeline

    pipeline = build_pipeline()
    result = await pipeline.classifier.classify(args.text)
    print(f"Specialty:   {result.specialty}")
    print(f"Confidence:  {result.confidence:.2f}")
    print(f"Method:      {result.method}")
    keyword = result.signal("keyword")
    if keyword is not None and keyword.matched_keywords:
        print(f"Keywords:    {', '.join(keyword.matched_keywords)}")
    return 0


async def _cmd_cache_stats(args: argparse.Namespace) -> int:
    """Display entry counts per cache region."""
    from medsite.cache.cache_factory import create_generation_cache
    from medsite.config.settings import Settings

    stats = await create_generation_cache(Settings()).stats()
    print("\nCache statistics:")
    for region, size in stats.size_per_region.items():
        print(f"  {region:<15} {size} entries")
    print(f"  {'total':<15} {stats.total_size} entries")
    return 0


async def _cmd_cache_clear(args: argparse.Namespace) -> int:
    """Clear one or every cache region."""
    from medsite.cache.cache_factory import create_generation_cache
    from medsite.cache.keys import Region
    from medsite.config.settings import Settings

    region = Region(args.region) if args.region else None
    await create_generation_cache(Settings()).clear(region)
    print(f"Cleared {'all cache regions' if region is None else f'cache region {region.value}'}")
    return 0


def _print_result_summary(result: object, output: Path) -> None:
    """Print a human-readable summary of a WebsiteResult."""
    print("\nWebsite generated:")
    print(f"  Specialty:    {result.classification.specialty} ({result.classification.method})")
    print(f"  Template:     {result.template_name}")
    print(f"  Quality:      {result.quality_score:.2f}")
    print(f"  Fallback:     {'yes' if result.fallback_used else 'no'}")
    print(f"  Output:       {output}")
    for warning in result.warnings:
        print(f"  Warning:      {warning}")


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from medsite.config.settings import Settings
    from medsite.logging.logger import setup_logging

    settings = Settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format="text" if verbose else settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
