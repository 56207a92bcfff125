"""Unit tests for the stats tee decorators."""

from datetime import datetime, timedelta

import pytest

from laakhay.streams.core import (
    ObservabilityError,
    ReaderFunc,
    SinkClosed,
    StreamContext,
    StreamEnded,
    StreamErrorGroup,
    WriterFunc,
    read_writer_from,
    reader_from,
)
from laakhay.streams.models import BatchedStats, StreamedStats
from laakhay.streams.stats import (
    BatchedTeeReader,
    BatchedTeeWriter,
    StreamedTeeReader,
    StreamedTeeWriter,
)


async def _records(buffer):
    out = []
    while len(buffer):
        out.append(await buffer.read(None))
    return out


async def _fail_read(ctx):
    raise RuntimeError("read failed")


async def _fail_write(ctx, value):
    raise RuntimeError("write failed")


async def _stats_down(ctx, record):
    raise ConnectionError("stats down")


class TestStreamedTeeReader:
    """Test per-element stats on the read side."""

    @pytest.mark.asyncio
    async def test_records_each_read(self):
        """Test one record per read with tag, formatted value and context."""
        stats = read_writer_from()
        ctx = StreamContext.background().with_values(job="import", shard=3)
        reader = StreamedTeeReader(
            reader_from(1, 2), stats, tag="src", fmt=lambda v: v * 10, ctx_keys=["shard", "job"]
        )

        assert await reader.read(ctx) == 1
        assert await reader.read(ctx) == 2

        records = await _records(stats)
        assert [r.value for r in records] == [10, 20]
        assert all(isinstance(r, StreamedStats) for r in records)
        assert all(r.tag == "src" and r.error is None for r in records)
        assert records[0].context == (("shard", 3), ("job", "import"))
        assert records[0].ctx == {"shard": 3, "job": "import"}
        assert isinstance(records[0].stamp, datetime)
        assert records[1].delta >= timedelta(0)
        assert records[1].stamp >= records[0].stamp

    @pytest.mark.asyncio
    async def test_defaults(self):
        """Test the default tag, no formatter and no context."""
        stats = read_writer_from()
        await StreamedTeeReader(reader_from("v"), stats).read(None)

        (record,) = await _records(stats)
        assert record.tag == "<unset>"
        assert record.value is None
        assert record.context == ()

    @pytest.mark.asyncio
    async def test_absent_side_channel_passes_through(self):
        """Test a None stats writer leaves values and errors untouched."""
        reader = StreamedTeeReader(reader_from(1))
        assert await reader.read(None) == 1
        with pytest.raises(StreamEnded):
            await reader.read(None)

        failing = StreamedTeeReader(ReaderFunc(_fail_read))
        with pytest.raises(RuntimeError, match="read failed"):
            await failing.read(None)

    @pytest.mark.asyncio
    async def test_end_emits_no_record(self):
        """Test StreamEnded is re-raised with no record written."""
        stats = read_writer_from()
        with pytest.raises(StreamEnded):
            await StreamedTeeReader(reader_from(), stats).read(None)
        assert len(stats) == 0

    @pytest.mark.asyncio
    async def test_records_primary_error(self):
        """Test a read error is recorded and then raised as-is."""
        stats = read_writer_from()
        reader = StreamedTeeReader(ReaderFunc(_fail_read), stats, fmt=str)

        with pytest.raises(RuntimeError, match="read failed"):
            await reader.read(None)

        (record,) = await _records(stats)
        assert isinstance(record.error, RuntimeError)
        assert record.value is None
        assert record.model_dump()["error"] == "RuntimeError: read failed"

    @pytest.mark.asyncio
    async def test_side_failure_wraps_value(self):
        """Test a stats failure raises ObservabilityError carrying the value."""
        reader = StreamedTeeReader(reader_from(7), WriterFunc(_stats_down), tag="t")

        with pytest.raises(ObservabilityError) as exc_info:
            await reader.read(None)

        assert exc_info.value.value == 7
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_both_failures_are_grouped(self):
        """Test primary and side errors surface together."""
        reader = StreamedTeeReader(ReaderFunc(_fail_read), WriterFunc(_stats_down))

        with pytest.raises(StreamErrorGroup) as exc_info:
            await reader.read(None)

        primary, side = exc_info.value.exceptions
        assert isinstance(primary, RuntimeError)
        assert isinstance(side, ObservabilityError)

    @pytest.mark.asyncio
    async def test_missing_reader_is_ended(self):
        """Test None reader raises StreamEnded."""
        with pytest.raises(StreamEnded):
            await StreamedTeeReader(None, read_writer_from()).read(None)


class TestBatchedTeeReader:
    """Test per-batch stats on the read side."""

    @pytest.mark.asyncio
    async def test_records_batch_length(self):
        """Test the record carries the batch length."""
        stats = read_writer_from()
        reader = BatchedTeeReader(reader_from([1, 2, 3], []), stats, tag="batch")

        assert await reader.read(None) == [1, 2, 3]
        assert await reader.read(None) == []

        records = await _records(stats)
        assert all(isinstance(r, BatchedStats) for r in records)
        assert [r.length for r in records] == [3, 0]

    @pytest.mark.asyncio
    async def test_error_records_zero_length(self):
        """Test a failed batch read is recorded with length 0."""
        stats = read_writer_from()
        with pytest.raises(RuntimeError):
            await BatchedTeeReader(ReaderFunc(_fail_read), stats).read(None)

        (record,) = await _records(stats)
        assert record.length == 0
        assert isinstance(record.error, RuntimeError)


class TestStreamedTeeWriter:
    """Test per-element stats on the write side."""

    @pytest.mark.asyncio
    async def test_records_each_write(self):
        """Test values reach the writer and one record per write is emitted."""
        sink = read_writer_from()
        stats = read_writer_from()
        writer = StreamedTeeWriter(sink, stats, tag="dst", fmt=len)

        await writer.write(None, "abc")

        assert await sink.read(None) == "abc"
        (record,) = await _records(stats)
        assert record.tag == "dst"
        assert record.value == 3

    @pytest.mark.asyncio
    async def test_closed_emits_no_record(self):
        """Test SinkClosed is re-raised with no record written."""
        stats = read_writer_from()
        with pytest.raises(SinkClosed):
            await StreamedTeeWriter(WriterFunc(), stats).write(None, 1)
        assert len(stats) == 0

    @pytest.mark.asyncio
    async def test_absent_side_channel_passes_through(self):
        """Test a None stats writer changes nothing."""
        sink = read_writer_from()
        await StreamedTeeWriter(sink).write(None, 1)
        assert await sink.read(None) == 1

    @pytest.mark.asyncio
    async def test_side_failure_after_successful_write(self):
        """Test the value is written even when stats fail."""
        sink = read_writer_from()
        writer = StreamedTeeWriter(sink, WriterFunc(_stats_down))

        with pytest.raises(ObservabilityError) as exc_info:
            await writer.write(None, "kept")

        assert exc_info.value.value == "kept"
        assert await sink.read(None) == "kept"

    @pytest.mark.asyncio
    async def test_both_failures_are_grouped(self):
        """Test primary and side errors surface together."""
        writer = StreamedTeeWriter(WriterFunc(_fail_write), WriterFunc(_stats_down))
        with pytest.raises(StreamErrorGroup):
            await writer.write(None, 1)

    @pytest.mark.asyncio
    async def test_missing_writer_is_closed(self):
        """Test None writer raises SinkClosed."""
        with pytest.raises(SinkClosed):
            await StreamedTeeWriter(None, read_writer_from()).write(None, 1)


class TestBatchedTeeWriter:
    """Test per-batch stats on the write side."""

    @pytest.mark.asyncio
    async def test_records_batch_length(self):
        """Test the record carries the written batch length."""
        sink = read_writer_from()
        stats = read_writer_from()
        ctx = StreamContext.background().with_values(run=1)

        await BatchedTeeWriter(sink, stats, ctx_keys=["run"]).write(ctx, [1, 2])

        (record,) = await _records(stats)
        assert record.length == 2
        assert record.ctx == {"run": 1}

    @pytest.mark.asyncio
    async def test_records_primary_error(self):
        """Test a failed batch write is recorded and re-raised."""
        stats = read_writer_from()
        with pytest.raises(RuntimeError):
            await BatchedTeeWriter(WriterFunc(_fail_write), stats).write(None, [1])

        (record,) = await _records(stats)
        assert record.length == 1
        assert isinstance(record.error, RuntimeError)
