"""
Streaming json writer

The generator writes forward only into a caller-owned stream (text or binary), nothing is
read back and the document is never held in memory as a whole:

    with JsonGenerator(out) as gen:
        gen.write_start_object()
        gen.write_field_name("total")
        gen.write_number(1)
        gen.write_end_object()

Closing the generator doesn't close the stream, the caller remains responsible for it.
"""
import codecs
import io
import json
from .errors import DataError, EncoderIOError, GenerationError
from .json_encoder import SAJSONEncoder


def is_binary_stream(stream) -> bool:
    """
    io streams are recognized by their base class, other writers (eg. codecs.StreamWriter
    or duck-typed sinks) by their mode and take text otherwise
    """
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    if isinstance(stream, codecs.StreamWriter):
        return False
    return "b" in str(getattr(stream, "mode", ""))


OBJECT = "object"
ARRAY = "array"


class _Context:
    """
    An open object or array
    """

    __slots__ = ("kind", "first", "pending_field")

    def __init__(self, kind):
        self.kind = kind
        self.first = True
        self.pending_field = False


class JsonGenerator:
    """
    Compact json output: "," and ":" separators without whitespace, non-ascii characters are written as is
    """

    def __init__(self, stream, encoding="utf-8", json_encoder=SAJSONEncoder, binary=None):
        """
        :param stream: writable text or binary stream
        :param encoding: encoding used for binary streams
        :param json_encoder: json.JSONEncoder subclass for write_object
        :param binary: whether stream takes bytes, None to detect it from the stream
        """
        self.stream = stream
        self.encoding = encoding
        self._binary = is_binary_stream(stream) if binary is None else binary
        self._stack = []
        self._root_written = False
        self._json = json_encoder(separators=(",", ":"), ensure_ascii=False, allow_nan=False)

    @property
    def depth(self) -> int:
        return len(self._stack)

    def _write(self, text):
        data = text.encode(self.encoding) if self._binary else text
        try:
            self.stream.write(data)
        except OSError as exc:
            raise EncoderIOError(f"Failed to write to {self.stream!r}: {exc}") from exc
        except TypeError as exc:
            # text written to a binary stream or the other way around
            raise EncoderIOError(f"Stream {self.stream!r} doesn't accept {type(data).__name__}: {exc}") from exc

    def _before_value(self):
        if not self._stack:
            if self._root_written:
                raise GenerationError("Only one root value can be written")
            self._root_written = True
            return
        context = self._stack[-1]
        if context.kind == OBJECT:
            if not context.pending_field:
                raise GenerationError("Object value written without a field name")
            context.pending_field = False
        else:
            if not context.first:
                self._write(",")
            context.first = False

    def _dumps(self, value):
        try:
            return self._json.encode(value)
        except (TypeError, ValueError) as exc:
            raise DataError(f"Value {value!r} can't be serialized: {exc}") from exc

    def write_start_object(self):
        self._before_value()
        self._write("{")
        self._stack.append(_Context(OBJECT))

    def write_end_object(self):
        self._end(OBJECT, "}")

    def write_start_array(self):
        self._before_value()
        self._write("[")
        self._stack.append(_Context(ARRAY))

    def write_end_array(self):
        self._end(ARRAY, "]")

    def _end(self, kind, token):
        if not self._stack or self._stack[-1].kind != kind:
            raise GenerationError(f"No {kind} to close")
        if self._stack[-1].pending_field:
            raise GenerationError("Object closed after a field name without value")
        self._stack.pop()
        self._write(token)

    def write_field_name(self, name):
        if not self._stack or self._stack[-1].kind != OBJECT:
            raise GenerationError(f"Field name {name!r} written outside of an object")
        context = self._stack[-1]
        if context.pending_field:
            raise GenerationError(f"Field name {name!r} written while expecting a value")
        if not context.first:
            self._write(",")
        context.first = False
        context.pending_field = True
        self._write(self._dumps(str(name)) + ":")

    def write_string(self, value):
        self._before_value()
        self._write(self._dumps(str(value)))

    def write_number(self, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataError(f"Not a number: {value!r}")
        text = self._dumps(value)
        self._before_value()
        self._write(text)

    def write_boolean(self, value):
        self._before_value()
        self._write("true" if value else "false")

    def write_null(self):
        self._before_value()
        self._write("null")

    def write_object(self, value):
        """
        Write any json serializable value (dicts, lists and the types handled by the json encoder)
        """
        text = self._dumps(value)
        self._before_value()
        self._write(text)

    def flush(self):
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            try:
                flush()
            except OSError as exc:
                raise EncoderIOError(f"Failed to flush {self.stream!r}: {exc}") from exc

    def close(self):
        """
        Check that all objects and arrays have been closed and flush the stream
        The stream itself isn't closed
        """
        if self._stack:
            raise GenerationError(f"{len(self._stack)} unclosed json structure(s)")
        self.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()
        return False
