"""
sch2drawio Logging Configuration

Verbose logging utilities for debugging render passes.
"""

import logging

# Package logger; library modules log through children of this logger
_logger = logging.getLogger("sch2drawio")
_logger.addHandler(logging.NullHandler())  # Default: no output


def enable_verbose(level: str = "INFO", format: str = None) -> None:
    """Enable verbose logging for debugging.

    Args:
        level: Logging level - "DEBUG", "INFO", "WARNING", "ERROR"
        format: Optional custom format string

    Example:
        enable_verbose("DEBUG")
        Renderer(schematic, styles).render_symbols()  # Will log each symbol
        disable_verbose()
    """
    _logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper()))

    if format is None:
        format = "%(levelname)s %(name)s: %(message)s"

    handler.setFormatter(logging.Formatter(format))
    _logger.addHandler(handler)


def disable_verbose() -> None:
    """Disable verbose logging."""
    _logger.setLevel(logging.WARNING)
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)
