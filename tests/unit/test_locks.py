import asyncio

import pytest

from golinks.locks import ReadWriteLock


@pytest.mark.asyncio
async def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = 0
    peak = 0

    async def reader():
        nonlocal inside, peak
        async with lock.read():
            inside += 1
            peak = max(peak, inside)
            await asyncio.sleep(0.01)
            inside -= 1

    await asyncio.gather(*(reader() for _ in range(5)))
    assert peak == 5


@pytest.mark.asyncio
async def test_writer_excludes_readers_and_writers():
    lock = ReadWriteLock()
    events = []

    async def writer(tag):
        async with lock.write():
            events.append(f"{tag}-start")
            await asyncio.sleep(0.01)
            events.append(f"{tag}-end")

    async def reader(tag):
        async with lock.read():
            events.append(f"{tag}-read")

    await asyncio.gather(writer("w1"), reader("r1"), writer("w2"), reader("r2"))

    # Every write is a contiguous start/end pair
    for tag in ("w1", "w2"):
        start = events.index(f"{tag}-start")
        assert events[start + 1] == f"{tag}-end"


@pytest.mark.asyncio
async def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    order = []
    first_reader_in = asyncio.Event()

    async def long_reader():
        async with lock.read():
            first_reader_in.set()
            await asyncio.sleep(0.02)
            order.append("reader-1")

    async def writer():
        await first_reader_in.wait()
        async with lock.write():
            order.append("writer")

    async def late_reader():
        await first_reader_in.wait()
        await asyncio.sleep(0.005)
        async with lock.read():
            order.append("reader-2")

    await asyncio.gather(long_reader(), writer(), late_reader())
    assert order == ["reader-1", "writer", "reader-2"]


@pytest.mark.asyncio
async def test_cancelled_writer_releases_waiting_readers():
    lock = ReadWriteLock()
    reader_in = asyncio.Event()
    release = asyncio.Event()

    async def holder():
        async with lock.read():
            reader_in.set()
            await release.wait()

    holder_task = asyncio.create_task(holder())
    await reader_in.wait()

    async def blocked_writer():
        async with lock.write():
            pass

    writer_task = asyncio.create_task(blocked_writer())
    await asyncio.sleep(0)
    writer_task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await writer_task

    async with lock.read():
        pass

    release.set()
    await holder_task
