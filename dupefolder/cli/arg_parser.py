"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
duplicate folder finder command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..utils.exporters import EXPORT_FORMATS


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description='Find duplicate image folders',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /path/to/photos
      Compare every folder under /path/to/photos (quick mode)

  %(prog)s /mnt/backup /path/to/photos --mode deep
      Compare two trees, confirming matches with partial content hashes

  %(prog)s /path/to/photos --refresh
      Ignore cached fingerprints and rescan everything

  %(prog)s /path/to/photos --export issues.csv --export-format csv
      Export issues to CSV for external review

  %(prog)s ./config
      Analyze a folder named "config" (a bare "config" first argument runs
      the configuration command instead)
        """
    )

    parser.add_argument(
        'folders',
        type=Path,
        nargs='+',
        help='Top-level folders to analyze (all subfolders are included)'
    )

    parser.add_argument(
        '-m', '--mode',
        choices=['quick', 'deep'],
        default=None,
        help='Comparison mode: quick (size + dimensions) or deep (adds partial hash). '
             'Default: from user config, else quick'
    )

    # Caching
    parser.add_argument(
        '--cache-file',
        type=Path,
        default=None,
        help='Folder content cache file. Default: from user config'
    )

    parser.add_argument(
        '--no-cache',
        action='store_true',
        help='Do not read or write the cache file'
    )

    parser.add_argument(
        '--refresh',
        action='store_true',
        help='Discard cached folder contents and rescan everything'
    )

    # Export options
    parser.add_argument(
        '-e', '--export',
        type=Path,
        help='Export results to file'
    )

    parser.add_argument(
        '--export-format',
        choices=EXPORT_FORMATS,
        default='txt',
        help='Export format. Default: txt'
    )

    # Output options
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '--mode', 'deep'])
        >>> args.mode
        'deep'
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
