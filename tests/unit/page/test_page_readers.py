"""Unit tests for PageReader and ChainedPageReader."""

import math

import pytest

from laakhay.streams.core import (
    PaginationError,
    SinkClosed,
    StreamEnded,
    read_all,
    read_writer_from,
    reader_from,
)
from laakhay.streams.models import Page
from laakhay.streams.page import ChainedPageReader, PageReader


def _windows(pages):
    return [(p.skip, p.limit, p.total) for p in pages]


class TestPageReader:
    """Test single-bound pagination."""

    @pytest.mark.asyncio
    async def test_exact_division(self):
        """Test total 4, limit 2 yields two full pages."""
        pages = await read_all(PageReader(total=4, limit=2))
        assert _windows(pages) == [(0, 2, 4), (2, 2, 4)]

    @pytest.mark.asyncio
    async def test_final_page_is_truncated(self):
        """Test total 5, limit 3 truncates the last page."""
        pages = await read_all(PageReader(total=5, limit=3))
        assert _windows(pages) == [(0, 3, 5), (3, 2, 5)]

    @pytest.mark.asyncio
    async def test_zero_total_ends_immediately(self):
        """Test total 0 yields no pages."""
        with pytest.raises(StreamEnded):
            await PageReader(total=0, limit=3).read(None)

    @pytest.mark.asyncio
    async def test_stays_ended(self):
        """Test reads after the end keep raising StreamEnded."""
        reader = PageReader(total=1, limit=1)
        await reader.read(None)
        for _ in range(2):
            with pytest.raises(StreamEnded):
                await reader.read(None)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("total,limit", [(1, 1), (7, 3), (10, 10), (10, 4), (3, 8)])
    async def test_pages_are_contiguous_and_complete(self, total, limit):
        """Test windows are contiguous, cover total, and number ceil(total/limit)."""
        pages = await read_all(PageReader(total=total, limit=limit))

        assert len(pages) == math.ceil(total / limit)
        assert sum(p.limit for p in pages) == total
        assert pages[0].skip == 0
        for previous, current in zip(pages, pages[1:]):
            assert current.skip == previous.skip + previous.limit
        assert all(p.skip + p.limit <= p.total for p in pages)

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_rejected(self, limit):
        """Test construction with limit <= 0 raises PaginationError."""
        with pytest.raises(PaginationError):
            PageReader(total=4, limit=limit)

    def test_properties(self):
        """Test total and limit are exposed."""
        reader = PageReader(total=9, limit=4)
        assert reader.total == 9
        assert reader.limit == 4


class TestChainedPageReader:
    """Test pagination over a sequence of bounds."""

    @pytest.mark.asyncio
    async def test_chains_bounds(self):
        """Test bounds 1, 2, 3 with limit 2 restart skip for each bound."""
        pages = await read_all(ChainedPageReader(reader_from(1, 2, 3), limit=2))
        assert _windows(pages) == [(0, 1, 1), (0, 2, 2), (0, 2, 3), (2, 1, 3)]

    @pytest.mark.asyncio
    async def test_skips_empty_bounds(self):
        """Test zero and negative bounds produce no pages."""
        pages = await read_all(ChainedPageReader(reader_from(0, 2, -1, 0, 1), limit=5))
        assert _windows(pages) == [(0, 2, 2), (0, 1, 1)]

    @pytest.mark.asyncio
    async def test_stays_ended_after_bounds_end(self):
        """Test bounds written after the chain ended do not restart it."""
        bounds = read_writer_from(1)
        pages = ChainedPageReader(bounds, limit=2)

        assert _windows(await read_all(pages)) == [(0, 1, 1)]
        with pytest.raises(SinkClosed):
            await bounds.write(None, 4)
        with pytest.raises(StreamEnded):
            await pages.read(None)

    @pytest.mark.asyncio
    async def test_missing_bounds_is_ended(self):
        """Test None bounds ends at once."""
        with pytest.raises(StreamEnded):
            await ChainedPageReader(None, limit=2).read(None)

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self):
        """Test an operational error from the bounds reader is not swallowed."""

        class Failing:
            async def read(self, ctx):
                raise ConnectionError("bounds unavailable")

        with pytest.raises(ConnectionError):
            await ChainedPageReader(Failing(), limit=2).read(None)

    def test_non_positive_limit_rejected(self):
        """Test construction with limit <= 0 raises PaginationError."""
        with pytest.raises(PaginationError):
            ChainedPageReader(reader_from(1), limit=0)


class TestPageModel:
    """Test Page validation."""

    def test_window_must_fit_total(self):
        """Test skip + limit beyond total is rejected."""
        with pytest.raises(ValueError):
            Page(skip=3, limit=2, total=4)

    def test_negative_fields_rejected(self):
        """Test negative fields are rejected."""
        with pytest.raises(ValueError):
            Page(skip=-1, limit=1, total=1)

    def test_is_frozen(self):
        """Test Page is immutable."""
        page = Page(skip=0, limit=1, total=1)
        with pytest.raises(ValueError):
            page.skip = 1
