import logging
import os
import sys
from flask import Flask
import flask.app


class SAJSON:
    """This class holds the encoding configuration and optionally binds it to a Flask application
    :param app: a Flask application.
    :param LOGLEVEL: loglevel configuration variable, values from logging module (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables
    LOGLEVEL = logging.WARNING
    NULL_POLICY = "omit"  # "omit" or "null": how attributes without a value are written
    TIMEZONE = None  # None: system default zone, otherwise "UTC" or an IANA zone name
    DEFAULT_RELATIONSHIP_REPR = "inline"  # "inline", "id" or "omit"
    ID_DELIMITER = "_"  # composite primary keys are joined with this delimiter

    def __init__(self, app: flask.app.Flask = None, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        if app is not None:
            self.init_app(app, **kwargs)

    def init_app(self, app: flask.app.Flask, **kwargs) -> None:
        """
        Copy the configuration from the kwargs and the app config
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        for conf_name, conf_val in kwargs.items():
            setattr(SAJSON, conf_name, conf_val)

        for conf_name, conf_val in app.config.items():
            setattr(SAJSON, conf_name, conf_val)

        app.extensions["sajson"] = self

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        """
        log = logging.getLogger(__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# logging initialization
#
try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = SAJSON.init_logging(LOGLEVEL)
