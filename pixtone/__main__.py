"""
pixtone Command Line Interface

Usage:
    pixtone <command> [options]

Commands:
    adjust       Apply operations to an image, in the order given
    recipe       Run a JSON recipe
    init-recipe  Write an example recipe file
    operations   List available operations

Examples:
    pixtone adjust in.png out.jpg --hue 120 --saturation 30 --quality 90
    pixtone adjust in.png out.png --decolorize 60,40,40,60,20,80 --brightness-to-alpha
    pixtone adjust in.png out.png --rotate right --resize 800x600
    pixtone recipe -c recipe.json in.png out.png
"""

import argparse
import sys

from pixtone import __version__


def _int_list(count: int):
    def parse(text: str) -> list[int]:
        try:
            values = [int(v) for v in text.split(",")]
        except ValueError:
            raise argparse.ArgumentTypeError(f"expected {count} comma-separated integers: {text!r}")
        if len(values) != count:
            raise argparse.ArgumentTypeError(f"expected {count} comma-separated integers: {text!r}")
        return values
    return parse


def _size(text: str) -> tuple[int, int]:
    try:
        width, height = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT: {text!r}")
    return width, height


class _StepAction(argparse.Action):
    """Append (operation, params) to args.steps, keeping command-line order."""

    def __init__(self, option_strings, dest, operation, build, **kwargs):
        self.operation = operation
        self.build = build
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        steps = list(getattr(namespace, self.dest, None) or [])
        operation, params = self.build(self.operation, values)
        steps.append((operation, params))
        setattr(namespace, self.dest, steps)


def _add_step(parser, *flags, operation, build, **kwargs):
    parser.add_argument(
        *flags,
        dest='steps',
        action=_StepAction,
        operation=operation,
        build=build,
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pixtone',
        description='Per-pixel image color and transform toolkit',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    
    parser.add_argument(
        '-V', '--version',
        action='version',
        version=f'pixtone {__version__}',
    )
    
    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    
    # Adjust command
    adjust_parser = subparsers.add_parser(
        'adjust',
        help='Apply operations to an image',
    )
    adjust_parser.add_argument('input', help='Input image (PNG or JPEG)')
    adjust_parser.add_argument('output', help='Output image (.png, .jpg or .jpeg)')
    adjust_parser.set_defaults(steps=[])
    _add_step(
        adjust_parser, '--hue', operation='hue', type=int, metavar='DEGREES',
        build=lambda op, v: (op, {'degrees': v}),
        help='Shift hue by DEGREES',
    )
    _add_step(
        adjust_parser, '--saturation', operation='saturation', type=int, metavar='N',
        build=lambda op, v: (op, {'amount': v}),
        help='Saturate (+) or desaturate (-), -100 ~ 100',
    )
    _add_step(
        adjust_parser, '--brightness', operation='brightness', type=int, metavar='N',
        build=lambda op, v: (op, {'amount': v}),
        help='Brighten (+) or darken (-), -100 ~ 100',
    )
    _add_step(
        adjust_parser, '--contrast', operation='contrast', type=int, metavar='N',
        build=lambda op, v: (op, {'amount': v}),
        help='Raise (+) or lower (-) contrast, -100 ~ 100',
    )
    _add_step(
        adjust_parser, '--colorize', operation='colorize', type=_int_list(3), metavar='R,G,B',
        build=lambda op, v: (op, dict(zip(('red', 'green', 'blue'), v))),
        help='Add R,G,B (0 ~ 255 each) to every pixel',
    )
    _add_step(
        adjust_parser, '--decolorize', operation='decolorize', type=_int_list(6),
        nargs='?', const=None, metavar='R,Y,G,C,B,M',
        build=lambda op, v: (
            op, dict(zip(('red', 'yellow', 'green', 'cyan', 'blue', 'magenta'), v or ()))
        ),
        help='Convert to grayscale with optional per-color weights (-200 ~ 300)',
    )
    _add_step(
        adjust_parser, '--brightness-to-alpha', operation='brightness_to_alpha', nargs=0,
        build=lambda op, v: (op, {}),
        help='Turn opaque pixels into black with brightness-derived transparency',
    )
    _add_step(
        adjust_parser, '--flip', operation='flip', choices=['h', 'v'],
        build=lambda op, v: ('flip_horizontal' if v == 'h' else 'flip_vertical', {}),
        help='Flip horizontally (h) or vertically (v)',
    )
    _add_step(
        adjust_parser, '--rotate', operation='rotate', choices=['left', 'right'],
        build=lambda op, v: (f'rotate_{v}', {}),
        help='Rotate 90 degrees left or right',
    )
    _add_step(
        adjust_parser, '--resize', operation='resize', type=_size, metavar='WxH',
        build=lambda op, v: (op, {'width': v[0], 'height': v[1]}),
        help='Bicubic resize to WxH',
    )
    _add_step(
        adjust_parser, '--tile', operation='tile', type=_size, metavar='WxH',
        build=lambda op, v: (op, {'width': v[0], 'height': v[1]}),
        help='Tile the image to fill WxH',
    )
    adjust_parser.add_argument(
        '--quality',
        type=int,
        default=None,
        help='JPEG quality, 0 ~ 100 (default: 85)',
    )
    adjust_parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Suppress progress output',
    )
    
    # Recipe command
    recipe_parser = subparsers.add_parser(
        'recipe',
        help='Run a JSON recipe',
    )
    recipe_parser.add_argument(
        '-c', '--config',
        required=True,
        help='Recipe file',
    )
    recipe_parser.add_argument('input', nargs='?', help='Input image (overrides recipe)')
    recipe_parser.add_argument('output', nargs='?', help='Output image (overrides recipe)')
    recipe_parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Suppress progress output',
    )
    
    # Init-recipe command
    init_parser = subparsers.add_parser(
        'init-recipe',
        help='Write an example recipe file',
    )
    init_parser.add_argument(
        'path',
        nargs='?',
        default='recipe.json',
        help='Output path (default: recipe.json)',
    )
    
    # Operations command
    subparsers.add_parser(
        'operations',
        help='List available operations',
    )
    
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    
    if args.command is None:
        parser.print_help()
        return 0
    
    # Dispatch to appropriate command
    try:
        if args.command == 'adjust':
            return run_adjust(args)
        elif args.command == 'recipe':
            return run_recipe_command(args)
        elif args.command == 'init-recipe':
            return run_init_recipe(args)
        elif args.command == 'operations':
            return run_operations(args)
        else:
            parser.print_help()
            return 1
    except (ValueError, TypeError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _settings(quiet: bool, base=None):
    from pixtone.core.config import GlobalSettings, apply_env_overrides
    
    settings = apply_env_overrides(base or GlobalSettings(verbose=True))
    if quiet:
        settings.verbose = False
    return settings


def run_adjust(args):
    """Run the adjust command."""
    from pixtone.core.config import Recipe, StepConfig
    from pixtone.pipeline.runner import run_recipe
    
    settings = _settings(args.quiet)
    if args.quality is not None:
        settings.jpeg_quality = args.quality
    
    recipe = Recipe(
        global_settings=settings,
        steps=[StepConfig(name, params) for name, params in args.steps],
    )
    result = run_recipe(recipe, args.input, args.output)
    
    if settings.verbose:
        print(f"Complete: {result.output_path} ({result.width}x{result.height})")
    return 0


def run_recipe_command(args):
    """Run the recipe command."""
    from pixtone.core.config import load_recipe
    from pixtone.pipeline.runner import run_recipe
    
    recipe = load_recipe(args.config)
    recipe.global_settings = _settings(args.quiet, recipe.global_settings)
    result = run_recipe(recipe, args.input, args.output)
    
    if recipe.global_settings.verbose:
        print(f"Complete: {result.output_path} ({result.width}x{result.height})")
    return 0


def run_init_recipe(args):
    """Write an example recipe."""
    from pixtone.core.config import create_example_recipe
    
    create_example_recipe(args.path)
    return 0


def run_operations(args):
    """List registered operations."""
    from pixtone.pipeline.operations import describe_operations
    
    for name, description in describe_operations().items():
        print(f"{name:<22} {description}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
