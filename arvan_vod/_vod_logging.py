import logging

PACKAGE_LOGGER_NAME = "arvan_vod"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class LoggerConfig:
    """
    Configures the ``arvan_vod`` package logger.

    Module loggers are children of the package logger and carry neither a level nor a
    handler of their own, so the whole client is tuned from one place:

    >>> LoggerConfig(log_level=logging.DEBUG)

    Attributes:
        log_level (int): Level of the package logger.
        logger (logging.Logger): The package logger.
    """

    def __init__(self, log_level: int = logging.INFO):
        self.log_level = log_level
        self.logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        self.logger.setLevel(log_level)

        if not self.logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(console_handler)

    def get_logger(self) -> logging.Logger:
        return self.logger


def get_logger(name: str) -> logging.Logger:
    """
    Returns the logger of a module of the package.

    The package logger is configured at INFO the first time a module asks for its
    logger; a level set on it afterwards is left untouched.
    """
    if not logging.getLogger(PACKAGE_LOGGER_NAME).handlers:
        LoggerConfig()
    return logging.getLogger(name)
