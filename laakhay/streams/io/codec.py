"""Encoder/Decoder boundary.

Encoders write one value at a time into the binary stream they were built
around; decoders read one value at a time from theirs. The default codec is
newline-delimited JSON backed by a pydantic ``TypeAdapter``, so any type
pydantic can dump or validate (models, dataclasses, datetimes) works, and a
target type turns decoding into validation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import IO, Any, Protocol, runtime_checkable

from pydantic import TypeAdapter

from ..core.exceptions import SinkClosed, StreamEnded


@runtime_checkable
class Encoder(Protocol):
    """Encodes values into binary form."""

    def encode(self, value: Any) -> None: ...


@runtime_checkable
class Decoder(Protocol):
    """Decodes values from binary form."""

    def decode(self) -> Any: ...


EncoderFactory = Callable[[IO[bytes]], Encoder | None]
DecoderFactory = Callable[[IO[bytes]], Decoder | None]


@dataclass
class EncoderFunc:
    """Encoder backed by a callable; unset ``impl`` raises ``SinkClosed``."""

    impl: Callable[[Any], None] | None = None

    def encode(self, value: Any) -> None:
        if self.impl is None:
            raise SinkClosed()
        self.impl(value)


@dataclass
class DecoderFunc:
    """Decoder backed by a callable; unset ``impl`` raises ``StreamEnded``."""

    impl: Callable[[], Any] | None = None

    def decode(self) -> Any:
        if self.impl is None:
            raise StreamEnded()
        return self.impl()


class JsonEncoder:
    """Writes each value as one line of JSON.

    Args:
        stream: Binary stream to write into
        type_: Type used to serialize values (default: Any)
    """

    def __init__(self, stream: IO[bytes], type_: Any = Any) -> None:
        self._stream = stream
        self._adapter: TypeAdapter[Any] = TypeAdapter(type_)

    def encode(self, value: Any) -> None:
        self._stream.write(self._adapter.dump_json(value) + b"\n")


class JsonDecoder:
    """Reads one line of JSON per value, skipping blank lines.

    Args:
        stream: Binary stream to read from
        type_: Type to validate decoded values against (default: Any)

    Raises:
        StreamEnded: On end of stream
        pydantic.ValidationError: If a line is not valid for ``type_``
    """

    def __init__(self, stream: IO[bytes], type_: Any = Any) -> None:
        self._stream = stream
        self._adapter: TypeAdapter[Any] = TypeAdapter(type_)

    def decode(self) -> Any:
        while True:
            line = self._stream.readline()
            if not line:
                raise StreamEnded()
            if line.strip():
                return self._adapter.validate_json(line)
