"""A logging formatter that adds color to the output."""

import logging

(BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE) = list(range(8))

RESET_SEQ = "\033[0m"
COLOR_SEQ = "\033[1;{}m"

COLORS = {
    "WARNING": YELLOW,
    "INFO": GREEN,
    "DEBUG": BLUE,
    "CRITICAL": RED,
    "ERROR": RED,
}


class ColorFormatter(logging.Formatter):
    """A logging formatter that adds color to the output."""

    def __init__(self, msg) -> None:
        """Initializes the formatter.

        Args:
            msg: The format string to use.
        """
        logging.Formatter.__init__(self, msg)

    def formatColor(self, levelname: str, record: logging.LogRecord) -> str:
        """Formats the log level name with ANSI color codes.

        Debug records also carry the emitting module and function.

        Args:
            levelname: The name of the log level (e.g., 'INFO', 'DEBUG').
            record: The record being formatted.

        Returns:
            The colorized log level name.
        """
        colored = (
            "\033[2K"
            + COLOR_SEQ.format(30 + COLORS.get(levelname, WHITE))
            + levelname.lower()
            + RESET_SEQ
        )
        if levelname == "DEBUG":
            colored += " [{!s}:{!s}]".format(record.module, record.funcName)
        return colored

    def format(self, record: logging.LogRecord) -> str:
        """Formats the log record.

        Args:
            record: The log record to format.

        Returns:
            The formatted log record as a string.
        """
        record.message = record.getMessage()
        if self._fmt and self._fmt.find("%(levelname)") >= 0:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = self.formatColor(record.levelname, record)

        return logging.Formatter.format(self, record)


def create_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Creates a logger with a colorized output.

    Args:
        name: The name of the logger.
        level: The logging level.

    Returns:
        A configured `logging.Logger` instance.
    """
    out = logging.getLogger(name) if name else logging.getLogger()
    out.setLevel(level)
    if not any(isinstance(h.formatter, ColorFormatter) for h in out.handlers):
        handler = logging.StreamHandler()
        formatter = ColorFormatter("%(levelname)s: %(message)s")
        handler.setFormatter(formatter)
        out.addHandler(handler)
    return out
