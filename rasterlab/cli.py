"""
Command Line Interface Module

Parses command-line arguments for the raster transform pipeline.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .constants import (
    DEFAULT_BOX_SIZE,
    DFT_METHOD_DIRECT,
    DFT_METHODS,
    MIN_BOX_SIZE,
    Operation,
    WRITABLE_SUFFIXES,
)
from .core.color import parse_color
from .pipeline import parse_operations, parse_clip_box, run_pipeline

# Settings keys a YAML config file may set, by argparse destination
SETTINGS_KEYS = ("ops", "box_size", "degrees", "screen_color", "dft_method", "verbose")


def load_settings(config_path: str) -> Dict[str, Any]:
    """
    Read default option values from a YAML file.

    Args:
        config_path: Path to the YAML settings file

    Returns:
        Mapping of argparse destination -> value

    Raises:
        ValueError: If the file is not a mapping or has unknown keys
    """
    with open(config_path, encoding="utf-8") as f:
        settings = yaml.safe_load(f) or {}

    if not isinstance(settings, dict):
        raise ValueError(f"Settings file must contain a mapping: {config_path}")

    defaults = {}
    for key, value in settings.items():
        dest = str(key).replace("-", "_")
        if dest not in SETTINGS_KEYS:
            raise ValueError(f"Unknown setting '{key}' in {config_path}")
        if dest == "ops" and isinstance(value, list):
            value = ",".join(str(v) for v in value)
        # YAML reads an unquoted 0x00FF00 as an int
        if dest == "screen_color" and isinstance(value, int):
            value = f"0x{value:06X}"
        defaults[dest] = value

    return defaults


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the pipeline."""
    parser = argparse.ArgumentParser(
        prog="rasterlab",
        description="Apply pixel-level transforms and analyses to an image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m rasterlab.cli -i photo.png -o gray.png --ops grayscale
  python -m rasterlab.cli -i photo.png -o out.png --ops denoise,box_paint --box-size 3
  python -m rasterlab.cli -i photo.png -o turned.png --ops rotate --degrees 30
  python -m rasterlab.cli -i studio.png -o comp.png --ops green_screen --background beach.png
        """
    )

    # Required arguments
    parser.add_argument(
        "-i", "--input",
        required=True,
        help="Input image file path"
    )

    parser.add_argument(
        "-o", "--output",
        required=True,
        help=f"Output image path ({', '.join(WRITABLE_SUFFIXES)})"
    )

    # Optional arguments
    parser.add_argument(
        "--ops",
        default=Operation.GRAYSCALE,
        help=f"Comma separated operations, applied in order (choices: {', '.join(Operation.ALL)})"
    )

    parser.add_argument(
        "--config",
        help="YAML file with default option values"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    # Operation parameters
    params_group = parser.add_argument_group('operation parameters')

    params_group.add_argument(
        "--box-size",
        type=int,
        default=DEFAULT_BOX_SIZE,
        help=f"Block edge for box_paint (default: {DEFAULT_BOX_SIZE})"
    )

    params_group.add_argument(
        "--degrees",
        type=float,
        default=0.0,
        help="Clockwise rotation angle for rotate (default: 0)"
    )

    params_group.add_argument(
        "--clip",
        help="Clip region 'x1,y1,x2,y2' (inclusive corners)"
    )

    params_group.add_argument(
        "--screen-color",
        default="#00FF00",
        help="Screen color for green_screen, '#RRGGBB' (default: #00FF00)"
    )

    params_group.add_argument(
        "--background",
        help="Background image for green_screen"
    )

    params_group.add_argument(
        "--dft-method",
        choices=list(DFT_METHODS),
        default=DFT_METHOD_DIRECT,
        help=f"DFT evaluation method (default: {DFT_METHOD_DIRECT})"
    )

    # Analysis options
    analysis_group = parser.add_argument_group('analysis')

    analysis_group.add_argument(
        "--compare",
        help="Image to score against the output with cosine similarity"
    )

    return parser


def validate_args(args: argparse.Namespace) -> Tuple[bool, str]:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments

    Returns:
        Tuple of (is_valid, error_message)
    """
    # Check input file exists
    if not Path(args.input).exists():
        return False, f"Input file not found: {args.input}"

    if Path(args.output).suffix.lower() not in WRITABLE_SUFFIXES:
        return False, f"Output file must end in one of {', '.join(WRITABLE_SUFFIXES)}: {args.output}"

    try:
        operations = parse_operations(args.ops)
    except ValueError as e:
        return False, str(e)

    if args.box_size < MIN_BOX_SIZE:
        return False, f"Box size must be at least {MIN_BOX_SIZE}: {args.box_size}"

    if Operation.CLIP in operations:
        if not args.clip:
            return False, "clip operation requires --clip x1,y1,x2,y2"
        try:
            parse_clip_box(args.clip)
        except ValueError as e:
            return False, str(e)

    try:
        parse_color(args.screen_color)
    except ValueError as e:
        return False, str(e)

    if Operation.GREEN_SCREEN in operations and not args.background:
        return False, "green_screen operation requires --background"

    for label, path in (("Background", args.background), ("Compare", args.compare)):
        if path and not Path(path).exists():
            return False, f"{label} file not found: {path}"

    return True, ""


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse and validate command-line arguments.

    Values from --config replace the built-in defaults; explicit flags
    override both.

    Args:
        args: Optional list of arguments (uses sys.argv if None)

    Returns:
        Parsed and validated arguments
    """
    parser = create_parser()

    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config")
    known, _ = pre_parser.parse_known_args(args)

    if known.config:
        try:
            parser.set_defaults(**load_settings(known.config))
        except (OSError, ValueError, yaml.YAMLError) as e:
            parser.error(f"Cannot load settings: {e}")

    parsed = parser.parse_args(args)

    is_valid, error_msg = validate_args(parsed)
    if not is_valid:
        parser.error(error_msg)

    return parsed


def main():
    """Main entry point for CLI."""
    args = parse_args()

    try:
        run_pipeline(args)
    except KeyboardInterrupt:
        print("\nProcessing cancelled by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
