"""
Command Line Interface for discoverkit
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from . import __version__
from .config import DiscoveryConfig, load_config
from .manager import DiscoveryManager, create_manager
from .models import WarmupReport

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging"""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog='discoverkit',
        description='discoverkit - Manage cached class discovery results',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s cache                        # Warm caches for configured paths
  %(prog)s cache --force                # Clear and rebuild every cache
  %(prog)s clear discovery-settings     # Clear a single cache entry
  %(prog)s clear --all                  # Clear all caches without asking
        """
    )

    parser.add_argument(
        '-c', '--config',
        help='Path to discovery.yaml (default: $DISCOVERY_CONFIG or ./discovery.yaml)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Debug mode (very verbose)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    cache_parser = subparsers.add_parser('cache', help='Cache discovery results for the configured paths')
    cache_parser.add_argument(
        '--force',
        action='store_true',
        help='Force cache refresh even if cache exists'
    )

    clear_parser = subparsers.add_parser('clear', help='Clear discovery caches')
    clear_parser.add_argument(
        'key',
        nargs='?',
        help='Specific cache key to clear'
    )
    clear_parser.add_argument(
        '--all',
        action='store_true',
        help='Clear all caches without confirmation'
    )

    return parser.parse_args(args)


def warm_cache(manager: DiscoveryManager, config: DiscoveryConfig, force: bool = False) -> WarmupReport:
    """
    Run directory discovery with caching for every configured path group.

    Per-group failures are logged and counted, never raised.
    """
    report = WarmupReport(total_paths=len(config.paths))

    if force:
        manager.clear_cache()

    for name, directories in config.paths.items():
        cache_key = f"discovery-{name}"
        try:
            if not force and manager.cache_manager.get(cache_key) is not None:
                report.skipped += 1
                continue

            classes = manager.directories(directories).cached(cache_key).get()
            report.classes_discovered += len(classes)
            report.cached += 1
            logger.info(f"Cached {len(classes)} classes for {name}")
        except Exception as e:
            report.failed += 1
            report.failures[name] = str(e)
            logger.error(f"Discovery cache failed for {name}: {e}")

    return report


def run_cache(args: argparse.Namespace, config: DiscoveryConfig, manager: DiscoveryManager) -> int:
    """Warm the discovery cache"""
    print("\nDiscovery Cache\n")
    print("-" * 60)

    if not config.paths:
        print("No discovery paths configured.")
        print("Add path groups under the 'paths' key of discovery.yaml to enable cache warming.")
        return 0

    if args.force:
        print("Force flag detected - clearing existing caches...")

    report = warm_cache(manager, config, force=args.force)

    for name, error in report.failures.items():
        print(f"  ! {name}: {error}")

    if report.cached > 0:
        print("\nDiscovery caching completed successfully!\n")
    else:
        print("\nNo discovery paths were cached.\n")

    for label, value in report.to_dict().items():
        print(f"  {label:<20} {value}")

    return 0


def run_clear(args: argparse.Namespace, manager: DiscoveryManager,
              confirm: Callable[[str], str] = input) -> int:
    """Clear one or all discovery caches"""
    if args.key:
        manager.clear_cache(args.key)
        print(f"Discovery cache '{args.key}' cleared successfully!")
    else:
        if not args.all:
            answer = confirm("This will clear all discovery caches. Continue? [y/N] ")
            if answer.strip().lower() not in ('y', 'yes'):
                print("Operation cancelled.")
                return 0
        count = len(manager.cache_manager.keys())
        manager.clear_cache()
        print(f"All discovery caches cleared successfully! ({count} entries removed)")

    print("Tip: run 'discoverkit cache' to rebuild the cache.")
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parsed_args = parse_args(args)

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = load_config(parsed_args.config)
        manager = create_manager(config)

        if parsed_args.command == 'cache':
            return run_cache(parsed_args, config, manager)
        return run_clear(parsed_args, manager)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        if parsed_args.debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
