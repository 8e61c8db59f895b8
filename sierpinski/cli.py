import argparse
from dataclasses import replace

from sierpinski.settings import default_settings, load_settings


def build_parser():
    parser = argparse.ArgumentParser(
        description="Renders a Sierpinski triangle with OpenGL.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--load", type=str, metavar="PATH", help="Path to a YAML settings file.", default=None
    )
    parser.add_argument(
        "--depth", type=int, metavar="N", help="Maximum recursion depth, overrides the settings file.", default=None
    )
    parser.add_argument("--wireframe", action="store_true", help="Draw triangles as outlines.")
    parser.add_argument("--no-background", action="store_true", help="Skip the background rectangle.")
    parser.add_argument("--log-file", type=str, metavar="PATH", help="Also write the log to this file.", default=None)
    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)


def resolve_settings(args, parser=None):
    """Build the viewer settings from the loaded file (if any) and command line overrides."""
    parser = parser or build_parser()
    settings = default_settings
    if args.load:
        try:
            settings = load_settings(args.load)
        except (OSError, ValueError) as e:
            parser.error(f"could not load settings from {args.load}: {e}")

    overrides = {}
    if args.depth is not None:
        overrides["max_depth"] = args.depth
    if args.wireframe:
        overrides["wireframe"] = True
    if args.no_background:
        overrides["background"] = False
    return replace(settings, **overrides)
