#! /usr/bin/env python3
"""
Console logging for sshmux.  Everything goes to stderr so it never mixes
with what the panes display.
"""
import logging
import sys

__all__ = ['logger', 'setup_logging', 'ColorFormatter']

logger = logging.getLogger('sshmux')

# ANSI color codes
COLORS = {
    logging.DEBUG: '\033[0;32m',    # Green
    logging.INFO: '\033[0;32m',     # Green
    logging.WARNING: '\033[1;33m',  # Yellow
    logging.ERROR: '\033[0;31m',    # Red
    logging.CRITICAL: '\033[0;31m', # Red
}
RESET = '\033[0m'

PREFIXES = {
    logging.WARNING: 'Warning: ',
    logging.ERROR: 'Error: ',
    logging.CRITICAL: 'Error: ',
}


class ColorFormatter(logging.Formatter):
    """
    Progress messages are timestamped, warnings and errors are prefixed.
    Colors are only used when requested.
    """

    def __init__(self, color=False):
        super(ColorFormatter, self).__init__(datefmt='%H:%M:%S')
        self.color = color

    def format(self, record):
        message = record.getMessage()
        if record.exc_info and logger.isEnabledFor(logging.DEBUG):
            message = message + '\n' + self.formatException(record.exc_info)

        if record.levelno in PREFIXES:
            line = PREFIXES[record.levelno] + message
        else:
            line = '[{}] {}'.format(self.formatTime(record, self.datefmt),
                    message)

        if self.color:
            line = COLORS.get(record.levelno, '') + line + RESET
        return line


def setup_logging(verbose=False, stream=None):
    """
    Configure the sshmux logger.  Calling this again replaces the previous
    handler.

    @param verbose: Show progress messages, not only warnings and errors.
    @type verbose: bool

    @param stream: Write here instead of stderr.
    @type stream: file

    @returns: The configured logger
    @rtype: logging.Logger
    """
    stream = stream or sys.stderr
    color = hasattr(stream, 'isatty') and stream.isatty()

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(color=color))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
