import logging

import colorama

ROOT_TAG = "screen-overlay"
DATE_FORMAT = "%H:%M:%S"

_LEVEL_COLORS = (
    (logging.ERROR, colorama.Fore.RED),
    (logging.WARNING, colorama.Fore.YELLOW),
)


def _level_color(levelno: int) -> str:
    for threshold, color in _LEVEL_COLORS:
        if levelno >= threshold:
            return color
    return ""


class _ColorFormatter(logging.Formatter):
    """Timestamped progress lines; warnings and errors lead with a coloured level."""

    _PLAIN = "%(asctime)s [%(name)s] %(message)s"

    def usesTime(self) -> bool:
        # The format string is swapped per record, after asctime is decided.
        return True

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = _level_color(record.levelno)
        if color:
            self._style._fmt = f"{color}%(levelname)s:{colorama.Style.RESET_ALL} [%(name)s] %(message)s"
        else:
            self._style._fmt = self._PLAIN
        return super().formatMessage(record)


class _TagFilter(logging.Filter):
    """Shorten ``screen-overlay.x`` names to ``x``; other loggers pass untouched."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = ROOT_TAG + "."
        if record.name.startswith(prefix):
            record.name = record.name[len(prefix):]
        return True


def setup_logging(level: int = logging.INFO) -> None:
    """Configure the root handler once, at process start."""
    colorama.just_fix_windows_console()
    logging.basicConfig(level=level, datefmt=DATE_FORMAT)
    for handler in logging.root.handlers:
        handler.setFormatter(_ColorFormatter(datefmt=DATE_FORMAT))
        handler.addFilter(_TagFilter())


def get_logger(name: str) -> logging.Logger:
    """Child of the ``screen-overlay`` logger, for engine modules."""
    return logging.getLogger(ROOT_TAG).getChild(name)
