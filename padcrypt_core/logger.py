import logging, json, sys, time, os


def get_logger(name="padcrypt", level=None, to_file=None):
    """Structured JSON-line logger shared by all padcrypt components.

    ``level`` and ``to_file`` fall back to PADCRYPT_LOG_LEVEL and
    PADCRYPT_LOG_FILE.
    """
    logger = logging.getLogger(name)
    if level is None:
        level = getattr(logging, os.getenv("PADCRYPT_LOG_LEVEL", "INFO").upper(), logging.INFO)
    logger.setLevel(level)
    to_file = to_file or os.getenv("PADCRYPT_LOG_FILE")

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt=json.dumps({
                "ts": "%(asctime)s",
                "level": "%(levelname)s",
                "name": "%(name)s",
                "msg": "%(message)s"
            }),
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        formatter.converter = time.gmtime  # UTC timestamps
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
