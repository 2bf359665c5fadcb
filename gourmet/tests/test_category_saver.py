import asyncio

import pytest

from gourmet.infra.Category_Saver import DebouncedCategorySaver


class Recorder:
    def __init__(self, pause=0.0):
        self.saved = []
        self.pause = pause

    async def __call__(self, names):
        if self.pause:
            await asyncio.sleep(self.pause)
        self.saved.append(list(names))


@pytest.mark.asyncio
async def test_burst_of_edits_is_written_once():
    recorder = Recorder()
    saver = DebouncedCategorySaver(recorder, delay=0.05)
    saver.schedule(["A", "B"])
    saver.schedule(["B", "A"])
    saver.schedule(["B", "A", "C"])
    assert recorder.saved == []
    await asyncio.sleep(0.2)
    assert recorder.saved == [["B", "A", "C"]]
    assert saver.pending is None


@pytest.mark.asyncio
async def test_flush_writes_pending_immediately():
    recorder = Recorder()
    saver = DebouncedCategorySaver(recorder, delay=10)
    saver.schedule(["A"])
    await saver.close()
    assert recorder.saved == [["A"]]
    await saver.flush()
    assert recorder.saved == [["A"]]


@pytest.mark.asyncio
async def test_running_save_is_not_cancelled_by_new_edit():
    recorder = Recorder(pause=0.1)
    saver = DebouncedCategorySaver(recorder, delay=0.02)
    saver.schedule(["A"])
    await asyncio.sleep(0.05)  # first save is now in progress
    saver.schedule(["B"])
    await asyncio.sleep(0.3)
    assert recorder.saved == [["A"], ["B"]]


@pytest.mark.asyncio
async def test_failed_save_is_logged_not_raised(caplog):
    async def broken(names):
        raise RuntimeError("disk full")

    saver = DebouncedCategorySaver(broken, delay=0.01)
    saver.schedule(["A"])
    await asyncio.sleep(0.1)
    assert "Saving categories failed" in caplog.text


@pytest.mark.asyncio
async def test_discard_drops_pending_list():
    recorder = Recorder()
    saver = DebouncedCategorySaver(recorder, delay=0.05)
    saver.schedule(["B", "A"])
    saver.discard()
    assert saver.pending is None
    await asyncio.sleep(0.2)
    await saver.close()
    assert recorder.saved == []
