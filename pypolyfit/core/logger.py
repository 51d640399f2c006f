import logging
import os
import sys
import time

DEFAULT_FORMAT = "%(asctime)s [%(module)s:%(lineno)d - %(levelname)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(
    name,
    mode="console",
    dirname=None,
    level=logging.INFO,
    fmt_msg=DEFAULT_FORMAT,
    fmt_date=DEFAULT_DATE_FORMAT,
) -> logging.Logger:
    """
    Args:
        - name: logger name; library modules log under `pypolyfit.*`, so
            configuring `pypolyfit` captures the whole pipeline.
        - mode: where the messages go.
            - `file`, written to `<dirname>/logs/<date>-<name>.log`;
            - `console`, default, written to stderr.
        - level: messages below `level` are ignored.

    Calling this again for the same name replaces the previous handler
    instead of stacking a second one.

    Examples:
        1. console
        logger = get_logger("pypolyfit")
        logger.info(...)

        2. file under dirname/logs
        logger = get_logger("pypolyfit", "file", dirname)
    """

    logger = logging.getLogger(name)
    logger.setLevel(level)
    fmt = logging.Formatter(fmt=fmt_msg, datefmt=fmt_date)

    if mode == "file":
        if dirname is None:
            dirname = os.path.join(os.getcwd(), "logs")
        else:
            dirname = os.path.join(dirname, "logs")

        os.makedirs(dirname, exist_ok=True)

        filename = os.path.join(dirname, time.strftime("%Y-%m-%d-") + name + ".log")
        handler = logging.FileHandler(filename)
    elif mode == "console":
        handler = logging.StreamHandler(sys.stderr)
    else:
        raise ValueError(f"Unknown logger mode: {mode!r}")

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handler.setFormatter(fmt)
    logger.addHandler(handler)

    return logger
