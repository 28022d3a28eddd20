import logging
import json
import os
import sys

import config

# ANSI colors for interactive runs
class Colors:
    RESET = "\033[0m"
    GREY = "\033[90m"
    BLUE = "\033[94m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD = "\033[1m"


def script_name() -> str:
    """Name of the running script, e.g. "check_expired_challenges"."""
    return os.path.splitext(os.path.basename(sys.argv[0] or "python"))[0]


class HumanFormatter(logging.Formatter):
    """Colored single-line output; `context` extras are appended as key=value."""

    LEVELS = {
        logging.DEBUG: (Colors.GREY, "DEBUG"),
        logging.INFO: (Colors.BLUE, "INFO "),
        logging.WARNING: (Colors.YELLOW, "WARN "),
        logging.ERROR: (Colors.RED, "ERROR"),
        logging.CRITICAL: (Colors.RED + Colors.BOLD, "CRIT "),
    }

    def __init__(self, color: bool = True):
        super().__init__(datefmt="%H:%M:%S")
        self.color = color

    def format(self, record):
        color, tag = self.LEVELS.get(record.levelno, self.LEVELS[logging.INFO])
        line = f"{self.formatTime(record, self.datefmt)} [{tag}] {record.name}: {record.getMessage()}"
        context = getattr(record, "context", None)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return f"{color}{line}{Colors.RESET}" if self.color else line


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for cron mail and log collectors."""
    def format(self, record):
        log_obj = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "script": script_name(),
            "timestamp": self.formatTime(record, self.datefmt),
        }
        log_obj.update(getattr(record, "context", None) or {})
        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


def get_logger(name: str) -> logging.Logger:
    """Logger writing to stderr so script reports on stdout stay clean."""
    logger = logging.getLogger(name)

    # Scripts import several modules; attach one handler per logger only
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        if config.LOG_FORMAT == "JSON":
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(HumanFormatter(color=sys.stderr.isatty()))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    return logger
