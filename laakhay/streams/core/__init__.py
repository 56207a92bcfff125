"""Core components."""

from .context import StreamContext, ensure_context
from .exceptions import (
    ContextCancelled,
    ObservabilityError,
    PaginationError,
    SinkClosed,
    StreamEnded,
    StreamError,
    StreamErrorGroup,
    combine_errors,
    is_terminal,
)
from .stream import (
    ReadCloser,
    ReadCloserFunc,
    Reader,
    ReaderFunc,
    ReadWriter,
    ReadWriterFunc,
    WriteCloser,
    WriteCloserFunc,
    Writer,
    WriterFunc,
    aiter_reader,
    closed_writer,
    ended_reader,
    read_all,
    read_writer_from,
    reader_from,
)

__all__ = [
    # Contract
    "Reader",
    "Writer",
    "ReadWriter",
    "ReadCloser",
    "WriteCloser",
    "ReaderFunc",
    "WriterFunc",
    "ReadWriterFunc",
    "ReadCloserFunc",
    "WriteCloserFunc",
    # Constructors and helpers
    "reader_from",
    "read_writer_from",
    "ended_reader",
    "closed_writer",
    "aiter_reader",
    "read_all",
    # Context
    "StreamContext",
    "ensure_context",
    # Exceptions
    "StreamError",
    "StreamEnded",
    "SinkClosed",
    "ContextCancelled",
    "PaginationError",
    "ObservabilityError",
    "StreamErrorGroup",
    "combine_errors",
    "is_terminal",
]
