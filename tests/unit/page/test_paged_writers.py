"""Unit tests for PagedWriter and ChainedPagedWriter."""

import pytest

from laakhay.streams.core import SinkClosed, read_writer_from, reader_from
from laakhay.streams.page import ChainedPagedWriter, PagedWriter


async def _drain(buffer):
    out = []
    while len(buffer):
        out.append(await buffer.read(None))
    return out


class TestPagedWriter:
    """Test values are paired with pages until pages run out."""

    @pytest.mark.asyncio
    async def test_closes_after_last_page(self):
        """Test total 4, limit 2 accepts two writes and closes on the third."""
        sink = read_writer_from()
        writer = PagedWriter(sink, total=4, limit=2)

        await writer.write(None, "a")
        await writer.write(None, "b")
        with pytest.raises(SinkClosed):
            await writer.write(None, "c")

        written = await _drain(sink)
        assert [(p.value, p.skip, p.limit, p.total) for p in written] == [
            ("a", 0, 2, 4),
            ("b", 2, 2, 4),
        ]

    @pytest.mark.asyncio
    async def test_stays_closed(self):
        """Test every write after exhaustion raises SinkClosed."""
        writer = PagedWriter(read_writer_from(), total=0, limit=2)
        for _ in range(3):
            with pytest.raises(SinkClosed):
                await writer.write(None, 1)

    @pytest.mark.asyncio
    async def test_missing_writer_is_closed(self):
        """Test None writer raises SinkClosed."""
        with pytest.raises(SinkClosed):
            await PagedWriter(None, total=4, limit=2).write(None, 1)

    @pytest.mark.asyncio
    async def test_delegate_errors_propagate(self):
        """Test the wrapped writer's error reaches the caller."""

        class Failing:
            async def write(self, ctx, value):
                raise OSError("disk full")

        with pytest.raises(OSError, match="disk full"):
            await PagedWriter(Failing(), total=4, limit=2).write(None, 1)


class TestChainedPagedWriter:
    """Test chained pagination on the write side."""

    @pytest.mark.asyncio
    async def test_pages_across_bounds(self):
        """Test writes follow the chained page sequence, then close."""
        sink = read_writer_from()
        writer = ChainedPagedWriter(sink, reader_from(1, 2), limit=2)

        await writer.write(None, "x")
        await writer.write(None, "y")
        with pytest.raises(SinkClosed):
            await writer.write(None, "z")

        written = await _drain(sink)
        assert [(p.value, p.skip, p.limit, p.total) for p in written] == [
            ("x", 0, 1, 1),
            ("y", 0, 2, 2),
        ]

    @pytest.mark.asyncio
    async def test_missing_bounds_is_closed(self):
        """Test None bounds closes at once."""
        with pytest.raises(SinkClosed):
            await ChainedPagedWriter(read_writer_from(), None, limit=2).write(None, 1)
