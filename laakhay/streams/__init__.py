"""Laakhay Streams - Composable pull-based Reader/Writer pipelines."""

from .api import PipelineBuilder
from .core import (
    ContextCancelled,
    ObservabilityError,
    PaginationError,
    ReadCloser,
    ReadCloserFunc,
    Reader,
    ReaderFunc,
    ReadWriter,
    ReadWriterFunc,
    SinkClosed,
    StreamContext,
    StreamEnded,
    StreamError,
    StreamErrorGroup,
    WriteCloser,
    WriteCloserFunc,
    Writer,
    WriterFunc,
    aiter_reader,
    closed_writer,
    combine_errors,
    ended_reader,
    read_all,
    read_writer_from,
    reader_from,
)
from .io import (
    Decoder,
    DecoderFunc,
    Encoder,
    EncoderFunc,
    JsonDecoder,
    JsonEncoder,
    reader_from_bytes,
    writer_from_values,
)
from .log import BatchedLogReader, BatchedLogWriter, StreamedLogReader, StreamedLogWriter
from .models import BatchedStats, Page, Paged, StreamedStats
from .page import ChainedPagedWriter, ChainedPageReader, PagedWriter, PageReader
from .runtime import Pump, PumpMetrics, PumpState, start_pump
from .sinks import InMemorySink
from .sleep import DynamicDelayReader, StaticDelayReader, StaticDelayWriter
from .stats import BatchedTeeReader, BatchedTeeWriter, StreamedTeeReader, StreamedTeeWriter

__version__ = "0.1.0"

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
    "reader_from",
    "read_writer_from",
    "ended_reader",
    "closed_writer",
    "aiter_reader",
    "read_all",
    "StreamContext",
    # Exceptions
    "StreamError",
    "StreamEnded",
    "SinkClosed",
    "ContextCancelled",
    "PaginationError",
    "ObservabilityError",
    "StreamErrorGroup",
    "combine_errors",
    # Models
    "Page",
    "Paged",
    "StreamedStats",
    "BatchedStats",
    # Pagination
    "PageReader",
    "ChainedPageReader",
    "PagedWriter",
    "ChainedPagedWriter",
    # Pacing
    "StaticDelayReader",
    "DynamicDelayReader",
    "StaticDelayWriter",
    # Observability
    "StreamedTeeReader",
    "BatchedTeeReader",
    "StreamedTeeWriter",
    "BatchedTeeWriter",
    "StreamedLogReader",
    "BatchedLogReader",
    "StreamedLogWriter",
    "BatchedLogWriter",
    # Runtime
    "Pump",
    "PumpMetrics",
    "PumpState",
    "start_pump",
    "PipelineBuilder",
    # I/O
    "Encoder",
    "Decoder",
    "EncoderFunc",
    "DecoderFunc",
    "JsonEncoder",
    "JsonDecoder",
    "reader_from_bytes",
    "writer_from_values",
    "InMemorySink",
]
