from logging import getLogger, StreamHandler, Formatter

from pizzastore.config import LOG_LEVEL


def conf_logger(level):
    logger_ = getLogger("pizzastore")
    console_handler = StreamHandler()
    console_handler.setLevel(level)
    formatter = Formatter('%(asctime)s - %(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    if logger_.hasHandlers():
        logger_.handlers.clear()
    logger_.addHandler(console_handler)
    logger_.setLevel(level)
    return logger_


logger = conf_logger(LOG_LEVEL)


def log_exception(error: Exception, msg: str = ""):
    """log a handler-level failure; traceback only at debug"""
    logger.error(f"{msg}{error.__class__.__name__}: {error}")
    logger.debug("traceback", exc_info=error)


def log_message(*args):
    logger.debug(msg=f'{", ".join([str(i) for i in args])}')
