import queue

from sitecheck.services.dispatcher import CLOSED, Dispatcher


def _drain(q):
    items = []
    while not q.empty():
        items.append(q.get_nowait())
    return items


def test_enqueues_jobs_in_order_then_one_close_marker_per_consumer():
    q = queue.Queue()
    count = Dispatcher().dispatch(["a", "b", "a"], q, consumers=3)

    assert count == 3
    items = _drain(q)
    assert items[:3] == ["a", "b", "a"]
    assert items[3:] == [CLOSED, CLOSED, CLOSED]


def test_accepts_any_iterable():
    q = queue.Queue()
    Dispatcher().dispatch((u for u in ["x", "y"]), q, consumers=1)

    assert _drain(q) == ["x", "y", CLOSED]
