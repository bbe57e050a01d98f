# Configuration settings can be set in app.config, as SAJSON class attributes or as environment variables
# get_config looks them up in that order
import os
import logging
from flask import current_app
import sajson
from typing import Any, Optional

NULL_POLICIES = ("omit", "null")


def get_config(option: str, default: Any = None) -> Optional[Any]:
    """Retrieve a configuration parameter
    :param option: configuration parameter
    :param default: returned when the option isn't set anywhere
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # RuntimeError: working outside of the application context
        result = getattr(sajson.SAJSON, option, None)
        if result is None:
            result = os.environ.get(option, None)

    if result is None:
        return default
    return result


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return sajson.log.getEffectiveLevel() < logging.INFO
