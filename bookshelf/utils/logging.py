import logging
from datetime import datetime
from pathlib import Path


def setup_logging(log_path: Path = Path("./logs"), level: int = logging.INFO) -> logging.Logger:
    """
    Configure the bookshelf logger.

    Calling it again only adjusts the console level; handlers are
    installed once per process.
    """
    logger = logging.getLogger("bookshelf")
    logger.setLevel(logging.DEBUG)

    if logger.handlers:
        for handler in logger.handlers:
            if isinstance(handler, logging.FileHandler):
                continue
            handler.setLevel(level)
        return logger

    log_path.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    # Full session history, one file per run
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    file_handler = logging.FileHandler(log_path / f"bookshelf_{timestamp}.log", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    return logger
