"""Adapters between binary streams and value Readers/Writers.

The I/O on the underlying stream is synchronous; these adapters suit
in-memory buffers, pipes and local files.
"""

from __future__ import annotations

import io
from typing import IO, Any, TypeVar

from ..core.context import StreamContext
from ..core.stream import Reader, ReaderFunc, Writer, WriterFunc
from .codec import DecoderFactory, EncoderFactory, JsonDecoder, JsonEncoder

T = TypeVar("T")


def reader_from_bytes(
    source: IO[bytes] | None,
    decoder: DecoderFactory | None = None,
    type_: Any = Any,
) -> Reader[T]:
    """Turn a binary stream into a Reader of decoded values.

    Example:
        >>> buf = io.BytesIO(b'"a"\\n"b"\\n')
        >>> reader = reader_from_bytes(buf, type_=str)
        >>> # reads "a", "b", then StreamEnded

    Args:
        source: Stream to decode from. None returns an always-ended Reader.
        decoder: Factory building a Decoder around ``source``. None, or a
            factory returning None, selects the JSON decoder.
        type_: Target type for the default JSON decoder

    Returns:
        Reader of decoded values
    """
    if source is None:
        return ReaderFunc()

    dec = decoder(source) if decoder is not None else None
    if dec is None:
        dec = JsonDecoder(source, type_)

    async def read(ctx: StreamContext | None) -> T:
        return dec.decode()

    return ReaderFunc(read)


def writer_from_values(
    sink: IO[bytes] | None,
    encoder: EncoderFactory | None = None,
    type_: Any = Any,
) -> Writer[T]:
    """Turn a binary stream into a Writer of values.

    Each value is encoded into an intermediate buffer, and the buffer is then
    flushed into ``sink`` in one write.

    Args:
        sink: Stream receiving encoded bytes. None returns an always-closed
            Writer.
        encoder: Factory building an Encoder around the intermediate buffer.
            None, or a factory returning None, selects the JSON encoder.
        type_: Serialization type for the default JSON encoder

    Returns:
        Writer of values
    """
    if sink is None:
        return WriterFunc()

    buffer = io.BytesIO()
    enc = encoder(buffer) if encoder is not None else None
    if enc is None:
        enc = JsonEncoder(buffer, type_)

    async def write(ctx: StreamContext | None, value: T) -> None:
        try:
            enc.encode(value)
            sink.write(buffer.getvalue())
        finally:
            buffer.seek(0)
            buffer.truncate()

    return WriterFunc(write)
