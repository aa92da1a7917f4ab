import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FILE = "itinerary.log"


def _file_handler(path: str, formatter: logging.Formatter):
    try:
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"Itinerary log file {path!r} unavailable, console only: {e}\n")
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name: str) -> logging.Logger:
    """
    Logger for one itinerary module.

    Everything from DEBUG up goes to the log file named by ITINERARY_LOG_FILE
    (itinerary.log by default, "" turns it off); INFO and up also go to
    stdout, which is what `streamlit run` shows in the terminal.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # the page script runs top to bottom on every interaction
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    log_file = os.environ.get("ITINERARY_LOG_FILE", DEFAULT_LOG_FILE)
    if log_file:
        handler = _file_handler(log_file, formatter)
        if handler is not None:
            logger.addHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)
    logger.addHandler(console)

    return logger
