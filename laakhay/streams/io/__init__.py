"""I/O boundary: codecs and byte-stream adapters."""

from .adapters import reader_from_bytes, writer_from_values
from .codec import (
    Decoder,
    DecoderFactory,
    DecoderFunc,
    Encoder,
    EncoderFactory,
    EncoderFunc,
    JsonDecoder,
    JsonEncoder,
)

__all__ = [
    "Encoder",
    "Decoder",
    "EncoderFunc",
    "DecoderFunc",
    "EncoderFactory",
    "DecoderFactory",
    "JsonEncoder",
    "JsonDecoder",
    "reader_from_bytes",
    "writer_from_values",
]
