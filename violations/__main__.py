import argparse
import logging
import os
import sys
from pathlib import Path

from .core.cache import ModelCache
from .core.config import ConfigError, load_config
from .core.constants import DEFAULT_CACHE_SIZE
from .core.repository import FileSystemBuildRepository


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# Constants
DEFAULT_BUILDS_ROOT = "builds"


def main():
    """Main entry point for the violations report server."""
    # Parse arguments
    parser = argparse.ArgumentParser(description="Violations Report - per-build violations browser")
    parser.add_argument(
        "--builds-root",
        type=str,
        default=os.getenv("VIOLATIONS_BUILDS_ROOT", DEFAULT_BUILDS_ROOT),
        help="Directory holding one sub-directory per build number"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML threshold configuration (default: $VIOLATIONS_CONFIG)"
    )
    parser.add_argument(
        "--cache-size",
        type=int,
        default=int(os.getenv("VIOLATIONS_CACHE_SIZE", str(DEFAULT_CACHE_SIZE))),
        help="Number of parsed build models kept in memory"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=9010,
        help="Port for the API server"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    args = parser.parse_args()

    # Setup logging
    setup_logging(args.log_level)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Invalid violations configuration: {e}")
        sys.exit(1)

    builds_root = Path(args.builds_root)
    if not builds_root.is_dir():
        logger.warning(f"Builds root {builds_root} does not exist yet; no builds will be found")

    repository = FileSystemBuildRepository(
        builds_root,
        config,
        cache=ModelCache(max_entries=args.cache_size),
    )
    logger.info(f"Serving violations for builds under {builds_root.resolve()}")

    # Build FastAPI app
    from .api.app import create_app
    app = create_app(build_repository=repository, config=config)

    # Launch with uvicorn
    import uvicorn

    logger.info(f"Starting FastAPI server on http://0.0.0.0:{args.port}")
    print(f"\n  Violations report is running at: http://localhost:{args.port}")
    print(f"  API docs at: http://localhost:{args.port}/docs\n")

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=args.port,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
