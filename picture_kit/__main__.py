"""picture-tool: Apply pixel operations to images and report on the result.

Usage: picture-tool <operation> <image> [-o OUTPUT] [options]

Operations are auto-discovered from picture_kit/operations/.
Each operation module's docstring is its documentation.
Run `picture-tool help <operation>` for full module docs.

Images are read from and written to the images directory:
  --images-dir, else PICTURE_IMAGES_DIR, else ./images.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, picture-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import sys
from pathlib import Path

from picture_kit import registry
from picture_kit.core.buffer import PixelBuffer
from picture_kit.core.env import Settings, load_env
from picture_kit.core.report import build_report, format_json, format_text
from picture_kit.core.surface import PillowSurface


def _add_image_args(p: argparse.ArgumentParser) -> None:
    p.add_argument('image', help='Image file name, relative to the images directory')
    p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


def _build_parser() -> argparse.ArgumentParser:
    operations = registry.all_operations()

    epilog = (
        'Examples:\n'
        '  picture-tool invert photo.png -o photo_inverted.png\n'
        '  picture-tool rotate photo.png -o photo_rotated.png --json\n'
        '  picture-tool --images-dir ./pictures grayscale cat.jpg -o cat_grey.png\n'
        '  picture-tool info photo.png\n'
        '  picture-tool help mirror\n'
    )
    parser = argparse.ArgumentParser(
        prog='picture-tool',
        description='Apply pixel operations to images and report on the result.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument(
        '--images-dir',
        metavar='DIR',
        default=None,
        help='Directory images are loaded from and saved to (default: $PICTURE_IMAGES_DIR or ./images)',
    )
    sub = parser.add_subparsers(dest='command', help='Operation to apply')

    for name, op in sorted(operations.items()):
        doc = registry.module_doc(name)
        short_help = doc.splitlines()[0] if doc else op.help

        p = sub.add_parser(name, help=short_help)
        _add_image_args(p)
        p.add_argument('-o', '--output', help='Save the result under this name in the images directory')

    info_parser = sub.add_parser('info', help='Report on an image without changing it')
    _add_image_args(info_parser)

    help_parser = sub.add_parser('help', help='Print full docs for an operation')
    help_parser.add_argument('operation', nargs='?', help='Operation name')

    return parser


def _print_help(name: str | None) -> None:
    """Print full module docstring for an operation."""
    operations = registry.all_operations()

    if name is None:
        print('Available operations:\n')
        for op_name, op in sorted(operations.items()):
            doc = registry.module_doc(op_name)
            short = doc.splitlines()[0] if doc else op.help
            print(f'  {op_name:<12} {short}')
        print('\nRun: picture-tool help <operation> for full docs.')
        return

    if name not in operations:
        print(f'Unknown operation: {name}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(operations))}', file=sys.stderr)
        sys.exit(1)

    doc = registry.module_doc(name)
    print(doc if doc else f'(No module docs for {name!r})')


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'picture-tool: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.operation)
        return

    images_dir = Path(args.images_dir) if args.images_dir else Settings.from_env().images_dir
    surface = PillowSurface(images_dir)
    buffer = PixelBuffer(args.image)
    try:
        buffer.display(surface)
    except (FileNotFoundError, ValueError) as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    applied: list[str] = []
    if args.command != 'info':
        buffer.apply_operation(registry.get(args.command))
        applied.append(args.command)

        if args.output:
            buffer.save(args.output)
            print(f'picture-tool: saved {images_dir / args.output}', file=sys.stderr)

    report = build_report(buffer, image_path=args.image, operations=applied)
    print(format_json(report) if args.json else format_text(report))


if __name__ == '__main__':
    main()
