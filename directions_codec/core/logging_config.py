import logging
import sys
from directions_codec.core.config import settings

def setup_logging():
    """
    Configure logging for the codec and the directions client.
    
    Sets up logging to stdout at the level given by LOG_LEVEL and returns
    the package logger.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    
    # Request lines are already logged by DirectionsClient
    logging.getLogger("httpx").setLevel(logging.WARNING)
    
    package_logger = logging.getLogger("directions_codec")
    package_logger.setLevel(level)
    return package_logger


# Create global logger instance
logger = setup_logging()
