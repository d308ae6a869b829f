import logging
import sys

# Package logger; every module logger (logging.getLogger(__name__)) is a child
LOGGER_NAME = "shader_graph"

def get_logger() -> logging.Logger:
    """Get the standard logger for Shader Graph."""
    return logging.getLogger(LOGGER_NAME)

def setup_logger(level=logging.INFO, stream=None):
    """
    Configure the Shader Graph logger.

    Compile diagnostics, cache hits and scheduling messages are logged by the
    module loggers under ``shader_graph`` and reach the handler installed here.

    Args:
        level: Logging level (default: INFO)
        stream: Output stream (default: sys.stdout)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to prevent duplicates
    if logger.handlers:
        logger.handlers.clear()

    ch = logging.StreamHandler(stream if stream is not None else sys.stdout)
    ch.setLevel(level)

    # Format: [ShaderGraph] [Level] Message
    formatter = logging.Formatter('[ShaderGraph] [%(levelname)s] %(message)s')
    ch.setFormatter(formatter)

    logger.addHandler(ch)

    return logger
