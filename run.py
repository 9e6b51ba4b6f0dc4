"""
Main entrypoint for the Crypto Dashboard application.
Usage: python run.py [gateway|dashboard|purchase AMOUNT [SYMBOL]]
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

USAGE = """Usage: python run.py [gateway|dashboard|purchase AMOUNT [SYMBOL]]
  gateway                  - Start the crypto gateway API
  dashboard                - Start the live terminal dashboard
  purchase AMOUNT [SYMBOL] - Simulate one purchase against live prices"""


def setup_logging(log_to_stdout: bool = True) -> None:
    """
    Set up consistent logging configuration for the application.
    Uses environment variables for configuration.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_format = os.getenv(
        "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_file = os.getenv("LOG_FILE", "crypto_dashboard.log")
    log_to_file = os.getenv("LOG_TO_FILE", "true").lower() == "true"

    numeric_level = getattr(logging, log_level, logging.INFO)

    handlers: list[logging.Handler] = []
    if log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_to_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )


logger = logging.getLogger(__name__)


async def main():
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    command = sys.argv[1].lower()

    match command, sys.argv[2:]:
        case "gateway", []:
            from crypto_dashboard.gateway.service import main as run_service

            setup_logging()
            logger.info("Starting gateway service...")
            await run_service()
        case "dashboard", []:
            from crypto_dashboard.dashboard.service import main as run_service

            # The dashboard redraws stdout, so logs only go to the file
            setup_logging(log_to_stdout=False)
            logger.info("Starting dashboard...")
            await run_service()
        case "purchase", [amount, *rest] if len(rest) <= 1:
            from crypto_dashboard.dashboard.service import simulate_purchase

            setup_logging()
            record = await simulate_purchase(amount, rest[0] if rest else None)
            sys.exit(0 if record is not None else 2)
        case _:
            print(f"Unknown command: {' '.join(sys.argv[1:])}")
            print(USAGE)
            sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        sys.exit(0)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)
