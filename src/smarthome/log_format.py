import logging

RESET = "\033[0m"
DIM = "\033[2m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
MAGENTA = "\033[35m"

LEVEL_COLORS = {
    logging.DEBUG: DIM,
    logging.INFO: GREEN,
    logging.WARNING: YELLOW,
    logging.ERROR: RED,
    logging.CRITICAL: RED + BOLD,
}

PLAIN_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class ColoredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno, "")
        level = record.levelname
        time = self.formatTime(record, self.datefmt)
        name = record.name.split(".")[-1]
        msg = record.getMessage()

        if "Client connected" in msg or "Client disconnected" in msg:
            msg = f"{CYAN}{msg}{RESET}"
        elif "logged in" in msg:
            msg = f"{BOLD}{GREEN}{msg}{RESET}"
        elif "toggled" in msg:
            msg = f"{BOLD}{MAGENTA}{msg}{RESET}"
        elif "Failed login" in msg:
            msg = f"{BOLD}{YELLOW}{msg}{RESET}"
        elif record.levelno == logging.DEBUG:
            msg = f"{DIM}{msg}{RESET}"
        elif record.levelno >= logging.WARNING:
            msg = f"{color}{msg}{RESET}"

        formatted = f"{DIM}{time}{RESET} {color}{level:<5}{RESET} {DIM}{name:<16}{RESET} {msg}"
        if record.exc_info:
            formatted = f"{formatted}\n{self.formatException(record.exc_info)}"
        return formatted


def configure_logging(level: int, log_file: str = "") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(ColoredFormatter(datefmt="%H:%M:%S"))
    root.addHandler(console)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as exc:
            logging.getLogger(__name__).warning("Cannot open log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
            root.addHandler(file_handler)
