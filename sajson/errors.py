# Encoding errors
#
# The application loglevel determines the level of detail in the error message.
# If set to debug, too much sensitive info (attribute values) might be shown !
#
# Configuration errors are raised when an encoder is constructed, data and I/O errors
# are raised while a document is being written: the partial output should be discarded.
#
from http import HTTPStatus
import sajson
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class EncoderError(Exception):
    """
    Base class of the sajson errors
    """

    message = "Encoder Error: "

    def __init__(self, message=""):
        Exception.__init__(self, message)
        sajson.log.error("%s%s", self.message, message)
        if is_debug():
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class ConfigurationError(EncoderError):
    """
    This exception is raised when an encoder, filter or mapper is constructed with invalid settings
    """

    message = "Configuration Error: "


class DataError(EncoderError):
    """
    This exception is raised when a value can't be encoded with the encoder of its attribute,
    for example a string in a date attribute
    """

    message = "Data Error: "


class GenerationError(EncoderError):
    """
    This exception is raised when the json generator is used out of order (eg. a value without a field name)
    """

    message = "Generation Error: "


class EncoderIOError(EncoderError):
    """
    This exception wraps the OSError raised by the output stream
    """

    message = "I/O Error: "


class ValidationError(EncoderError):
    """
    This exception is raised when invalid input has been detected while decoding attribute values
    Always send back the message to the client
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value):
        Exception.__init__(self, message)
        self.status_code = status_code
        sajson.log.warning("ValidationError: %s", message)
        self.message += str(message)
