"""Draw a random sample from media server libraries.

This script runs the RandomItemSampler against a live media server and
prints the sampled items. Without --library it lists the libraries the
token can see.
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from random_sample.errors import RandomSampleError
from random_sample.library import JellyfinClient, JellyfinDtoService, JellyfinLibraryManager
from random_sample.models import RandomSampleRequest
from random_sample.samplers import RandomItemSampler
from random_sample.utils.config import load_config
from random_sample.utils.logger import setup_logging


def print_libraries(libraries):
    """Print the libraries available for selection."""
    print(f"\n{'='*80}")
    print(f"Available libraries: {len(libraries)}")
    print(f"{'='*80}")
    for library in libraries:
        print(f"{library.get('Id')}  {library.get('Name')}  ({library.get('CollectionType') or 'Mixed'})")
    print()


def print_results(result, max_display=20):
    """Print sampled items in a readable format.

    Args:
        result: QueryResult returned by the sampler
        max_display: Maximum number of items to display
    """
    print(f"\n{'='*80}")
    print(f"Random sample: {result.total_record_count} items")
    print(f"{'='*80}")

    for i, item in enumerate(result.items[:max_display], start=1):
        year = item.get("ProductionYear") or ""
        print(f"{i:>3}. [{item.get('Type')}] {item.get('Name')} {year}")

    if result.total_record_count > max_display:
        print(f"\n... and {result.total_record_count - max_display} more items")
    print()


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Random Library Sample")
    parser.add_argument(
        "--config",
        type=str,
        default=str(project_root / "config" / "random_sample.yaml"),
        help="Path to the service configuration file"
    )
    parser.add_argument(
        "--token",
        type=str,
        required=True,
        help="User access token; a server API key has no user and cannot be used"
    )
    parser.add_argument(
        "--library",
        action="append",
        default=[],
        help="Library id to sample from (repeatable)"
    )
    parser.add_argument(
        "--size",
        type=int,
        default=20,
        help="Number of items to sample (default: 20)"
    )
    parser.add_argument("--no-movies", action="store_true", help="Exclude movies")
    parser.add_argument("--no-tv", action="store_true", help="Exclude TV shows")
    parser.add_argument("--music", action="store_true", help="Include music")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility"
    )
    return parser.parse_args(argv)


def main():
    """Sample the requested libraries, or list libraries if none given."""
    args = parse_arguments()

    config = load_config(args.config)
    setup_logging(config.logging.level, log_dir=None)

    try:
        client = JellyfinClient(config.host.url, timeout=int(config.host.timeout))
        library_manager = JellyfinLibraryManager(client)
        user = library_manager.get_user(args.token)
        print(f"✓ Connected to {client.base_url} as {user.name}")

        if not args.library:
            print_libraries(library_manager.get_user_libraries(user))
            return

        sampler = RandomItemSampler(
            library_manager,
            JellyfinDtoService(client),
            per_library_limit=int(config.sampling.per_library_limit),
            random_seed=args.seed,
        )
        request = RandomSampleRequest(
            library_ids=args.library,
            sample_size=args.size,
            include_movies=not args.no_movies,
            include_tv_shows=not args.no_tv,
            include_music=args.music,
        )
        error = request.validation_error()
        if error:
            print(f"✗ Error: {error}")
            sys.exit(1)

        print_results(sampler.get_random_sample(request, user))

    except RandomSampleError as e:
        print(f"\n✗ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
