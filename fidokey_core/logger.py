import logging, json, sys, time, os


def get_logger(name="fidokey", level=None, to_file=None):
    """Unified structured logger for all FIDOKEY components.

    `level` and `to_file` default to the FIDOKEY_LOG_LEVEL / FIDOKEY_LOG_FILE settings.
    """
    from .config import load_log_settings

    default_level, default_file = load_log_settings()
    if level is None:
        level = default_level
    if to_file is None:
        to_file = default_file

    logger = logging.getLogger(name)
    logger.setLevel(level)

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
