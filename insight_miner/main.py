"""Entry point for the Insight Miner poller"""
import asyncio
import logging
import sys

from .config import settings
from .exceptions import ConfigurationError
from .workflow.poller import DatasetPoller

# Set up logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Validate credentials, then poll for new datasets until interrupted"""
    try:
        settings.require_credentials()
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Using the following Cumul.io environment: {settings.cumulio_host}")

    poller = DatasetPoller()
    try:
        asyncio.run(poller.run_forever())
    except KeyboardInterrupt:
        logger.info("Stopped listening for new datasets")
    return 0


if __name__ == "__main__":
    sys.exit(main())
