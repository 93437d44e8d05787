import threading
import suite
from seqy import S, Enumerable, Pair, Triple, empty, from_range, generate, InvalidStateError
from seqy.extensions._producers import _Producer

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

letters = S(['a', 'b', 'c'])


def producer_threads():
    """zip producer threads that are still alive"""
    return [t for t in threading.enumerate() if t.name.startswith('seqy-zip-producer')]


def naturals():
    """0, 1, 2 ... forever, fresh on every traversal"""
    def naturals_data():
        n = 0
        while True:
            yield n
            n += 1
    return Enumerable(naturals_data)


def tracked(data, events):
    def tracked_data():
        try:
            for item in data:
                yield item
        finally:
            events.append('closed')
    return Enumerable(tracked_data)


# --- zip ---

@test("zip pairs elements and stops at the shorter side")
def test_zip_basic():
    result = S([1, 2, 3]).zip.zip(['a', 'b']).to.list()
    assert_that(result == [Pair(1, 'a'), Pair(2, 'b')], "two pairs expected")
    assert_that(result[0].first == 1 and result[0].second == 'a', "pair fields")


@test("zip length is the minimum of both lengths")
def test_zip_length_law():
    for left_len in (0, 1, 3, 7):
        for right_len in (0, 2, 7, 9):
            zipped = from_range(0, left_len).zip.zip(from_range(0, right_len))
            expected = min(left_len, right_len)
            assert_that(zipped.to.count() == expected, f"zip of {left_len} and {right_len}")


@test("zip with an empty side is empty")
def test_zip_empty():
    assert_that(empty().zip.zip(letters).to.list() == [], "empty left")
    assert_that(letters.zip.zip(empty()).to.list() == [], "empty right")


@test("zip of two infinite sequences can be bounded with take")
def test_zip_infinite():
    pairs = naturals().zip.zip(naturals().select(lambda n: n * n)).take(4).to.list()
    assert_that(pairs == [(0, 0), (1, 1), (2, 4), (3, 9)], "squares paired with naturals")
    assert_that(producer_threads() == [], "producers should be joined after take stops")


@test("zip can be traversed more than once")
def test_zip_retraversal():
    zipped = S([1, 2]).zip.zip(letters)
    assert_that(zipped.to.list() == zipped.to.list(), "same result both times")


@test("zip_with combines pairs with a selector")
def test_zip_with():
    result = S([1, 2, 3]).zip.zip_with([10, 20, 30], lambda a, b: a + b).to.list()
    assert_that(result == [11, 22, 33], "element-wise sums")


# --- zip_fill ---

@test("zip_fill pads the shorter right side")
def test_zip_fill_right_short():
    result = from_range(1, 6).zip.zip_fill(['a', 'b'], Pair(-1, 'FILL')).to.list()
    expected = [(1, 'a'), (2, 'b'), (3, 'FILL'), (4, 'FILL'), (5, 'FILL')]
    assert_that(result == expected, f"got {result}")


@test("zip_fill pads the shorter left side")
def test_zip_fill_left_short():
    result = S([1]).zip.zip_fill(letters, Pair(0, '?')).to.list()
    assert_that(result == [(1, 'a'), (0, 'b'), (0, 'c')], f"got {result}")


@test("zip_fill length is the maximum of both lengths")
def test_zip_fill_length_law():
    for left_len, right_len in ((0, 0), (0, 3), (4, 0), (2, 5), (5, 5)):
        zipped = from_range(0, left_len).zip.zip_fill(from_range(0, right_len), Pair(None, None))
        assert_that(zipped.to.count() == max(left_len, right_len), f"zip_fill of {left_len} and {right_len}")


# --- zip3 ---

@test("zip3 builds triples and stops at the shortest")
def test_zip3():
    result = S([1, 2, 3]).zip.zip3(letters, [True, False]).to.list()
    assert_that(result == [Triple(1, 'a', True), Triple(2, 'b', False)], f"got {result}")
    assert_that(result[1].third is False, "third field")


# --- producer lifecycle ---

@test("stepping zips over infinite sources then releasing leaves no threads")
def test_zip_release_no_leak():
    before = len(producer_threads())
    for _ in range(10):
        zipped = naturals().zip.zip(naturals())
        assert_that(zipped.step(), "infinite zip has a first element")
        assert_that(zipped.peek() == (0, 0), "first pair")
        zipped.release()
    assert_that(len(producer_threads()) == before, "release should join every producer")


@test("with-block releases a stepped zip")
def test_zip_context_manager():
    with naturals().zip.zip3(naturals(), naturals()) as zipped:
        zipped.step()
        zipped.step()
        assert_that(zipped.peek() == (1, 1, 1), "second triple")
    assert_that(producer_threads() == [], "leaving the block should join producers")


@test("zip closes both sources when it stops early")
def test_zip_closes_sources():
    left_events, right_events = [], []
    left = tracked(range(100), left_events)
    right = tracked(range(100), right_events)
    assert_that(left.zip.zip(right).take(3).to.count() == 3, "three pairs")
    assert_that(left_events == ['closed'] and right_events == ['closed'], "both sources closed")


@test("an error in a zipped source reaches the consumer")
def test_zip_error_propagation():
    broken = S([1, 2, 0]).select(lambda x: 10 // x)
    zipped = broken.zip.zip(naturals())
    assert_raises(ZeroDivisionError, zipped.to.list, "producer error should be re-raised")
    assert_that(producer_threads() == [], "producers should be joined after the error")


@test("zip_fill over a failing right side raises on the consumer")
def test_zip_fill_error_propagation():
    def failing():
        yield 'a'
        raise KeyError('boom')
    zipped = S([1, 2, 3]).zip.zip_fill(Enumerable(failing), Pair(0, ''))
    assert_raises(KeyError, zipped.to.list, "right side error should surface")


class _Abort(BaseException):
    pass


def run_with_deadline(func, seconds=2.0):
    """run func on a worker thread; returns (finished, outcome) where outcome is the result or the raised error"""
    outcome = []
    def worker():
        try:
            outcome.append(func())
        except BaseException as e:
            outcome.append(e)
    thread = threading.Thread(target=worker, daemon=True)
    thread.start()
    thread.join(seconds)
    return not thread.is_alive(), (outcome[0] if outcome else None)


@test("a source ending in a BaseException does not hang the zip")
def test_zip_base_exception():
    def aborting():
        yield 1
        raise _Abort('stop here')
    zipped = Enumerable(aborting).zip.zip(S(range(10)))
    finished, outcome = run_with_deadline(zipped.to.list)
    assert_that(finished, "consumer should not wait forever")
    assert_that(isinstance(outcome, _Abort), f"the abort should reach the consumer, got {outcome!r}")
    assert_that(producer_threads() == [], "producers should be joined")


@test("a zipped SystemExit is re-raised on the consumer")
def test_zip_system_exit():
    def exiting():
        yield 'a'
        raise SystemExit(3)
    zipped = S([1, 2, 3]).zip.zip_fill(Enumerable(exiting), Pair(0, ''))
    finished, outcome = run_with_deadline(zipped.to.list)
    assert_that(finished and isinstance(outcome, SystemExit) and outcome.code == 3, f"got {outcome!r}")


@test("a producer that vanished without a final message is reported, not waited on")
def test_receive_from_dead_producer():
    side = _Producer(S([1]), 'seqy-zip-producer-dead', threading.Event(), 1, 0.01)
    side.thread = threading.Thread(target=lambda: None, name='seqy-zip-producer-dead')
    side.thread.start()
    side.thread.join()
    finished, outcome = run_with_deadline(side.receive)
    assert_that(finished and isinstance(outcome, InvalidStateError), f"got {outcome!r}")
    assert_that(side.receive() == (None, False), "the side then counts as exhausted")


# --- cartesian product ---

@test("cartesian product pairs every element of both sides")
def test_cartesian_product():
    product = S([1, 2, 3]).comb.cartesian_product(letters)
    result = product.to.list()
    assert_that(len(result) == 9, "3 x 3 pairs")
    assert_that(result[:4] == [(1, 'a'), (1, 'b'), (1, 'c'), (2, 'a')], "outer side varies slowest")
    assert_that(product.to.list() == result, "re-traversal gives the same pairs")


@test("cartesian product size is the product of both sizes")
def test_cartesian_size_law():
    for a, b in ((0, 3), (3, 0), (1, 1), (4, 5)):
        product = from_range(0, a).comb.cartesian_product(from_range(0, b))
        assert_that(product.to.count() == a * b, f"{a} x {b}")


@test("cartesian product keeps the outer side lazy")
def test_cartesian_lazy_outer():
    calls = []
    def next_value():
        calls.append(None)
        return len(calls)
    result = generate(next_value).comb.cartesian_product(['x', 'y']).take(4).to.list()
    assert_that(result == [(1, 'x'), (1, 'y'), (2, 'x'), (2, 'y')], f"got {result}")
    assert_that(len(calls) == 2, "only two outer elements should be produced")


if __name__ == "__main__":
    suite.main(title="seqy zip and product test suite")
