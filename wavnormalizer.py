import argparse
import logging
import sys

from wavnorm.config import CONFIG_FILE, load_config


def get_arg_parser():
    parser = argparse.ArgumentParser(
        description="WavNormalizer - match the peak level of all WAV files in a folder to the loudest one"
    )
    parser.add_argument('folder', nargs='?',
                        help='Folder containing the WAV files')
    parser.add_argument('--config', type=str, default=None,
                        help=f'Path to config YAML (default: {CONFIG_FILE})')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    return parser


def setup_logging(level_name, debug=False):
    level = logging.DEBUG if debug else getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')


def main(argv=None):
    parser = get_arg_parser()
    args = parser.parse_args(argv)

    if not args.folder:
        print("Usage: Pass in a directory path", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.get('logging', {}).get('level', 'INFO'), args.debug)

    from wavnorm.postprocess import BatchNormalizer

    processor = BatchNormalizer(config)
    try:
        result = processor.run(args.folder)
    except (FileNotFoundError, NotADirectoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nLoudest File: {result.loudest_file}")
    print(f"Peak Amplitude: {result.peak_amplitude:g}")
    return 0 if result.failed == 0 else 2


if __name__ == '__main__':
    sys.exit(main())
