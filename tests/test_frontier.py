from wikirag.crawler import EnqueueStatus, Frontier


def test_fifo_order_and_exhaustion():
    frontier = Frontier()
    frontier.seed("start")
    frontier.push_many(["a:b", "a:c"])

    order = []
    identifier = frontier.next_pending()
    while identifier is not None:
        frontier.mark_visited(identifier)
        order.append(identifier)
        identifier = frontier.next_pending()

    assert order == ["start", "a:b", "a:c"]
    assert frontier.exhausted


def test_next_pending_does_not_consume():
    frontier = Frontier()
    frontier.seed("start")
    assert frontier.next_pending() == "start"
    assert frontier.next_pending() == "start"
    frontier.mark_visited("start")
    assert frontier.next_pending() is None


def test_visited_identifiers_are_not_requeued():
    frontier = Frontier()
    frontier.seed("start")
    frontier.mark_visited("start")

    results = frontier.push_many(["start", "a:b", "a:b"])

    assert [result.status for result in results] == [
        EnqueueStatus.SKIPPED_VISITED,
        EnqueueStatus.ENQUEUED,
        EnqueueStatus.SKIPPED_PENDING,
    ]
    assert frontier.pending() == ["start", "a:b"]


def test_mark_visited_once():
    frontier = Frontier()
    assert frontier.mark_visited("a:b") is True
    assert frontier.mark_visited("a:b") is False
    assert frontier.is_visited("a:b")


def test_pending_only_grows():
    frontier = Frontier()
    frontier.seed("start")
    frontier.mark_visited("start")
    frontier.push("a:b")
    frontier.mark_visited("a:b")

    assert frontier.pending() == ["start", "a:b"]
    assert frontier.visited() == {"start", "a:b"}
    assert frontier.snapshot() == {
        "pending": 2,
        "visited": 2,
        "enqueued": 2,
        "skipped_visited": 0,
        "skipped_pending": 0,
    }
