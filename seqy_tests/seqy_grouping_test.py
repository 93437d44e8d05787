import suite
from dgen import from_schema
from seqy import S, Enumerable, empty, flatten, from_range, generate, InvalidArgumentError

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

order_schema = {
    'customer': 'last_name',
    'status': {'_qen_provider': 'choice', 'from': ['new', 'paid', 'shipped']},
    'amount': ('pyint', {'min_value': 5, 'max_value': 200}),
}

one_to_eight = from_range(1, 9)


def tracked(data, events):
    def tracked_data():
        try:
            for item in data:
                events.append(item)
                yield item
        finally:
            events.append('closed')
    return Enumerable(tracked_data)


# --- group_by / partition ---

@test("group_by collects elements per key in first-seen order")
def test_group_by():
    groups = S(['apple', 'avocado', 'banana', 'blueberry', 'cherry']).group.group_by(lambda w: w[0])
    assert_that(list(groups) == ['a', 'b', 'c'], "keys in order of first occurrence")
    assert_that(groups['b'] == ['banana', 'blueberry'], "members keep source order")


@test("group_by over generated orders accounts for every order")
def test_group_by_generated():
    orders = from_schema(order_schema, seed=5).take(40).to.list()
    groups = S(orders).group.group_by(lambda o: o['status'])
    assert_that(sum(len(members) for members in groups.values()) == 40, "no order lost")
    assert_that(set(groups) <= {'new', 'paid', 'shipped'}, "only known statuses")


@test("partition splits by a predicate")
def test_partition():
    evens, odds = one_to_eight.group.partition(lambda x: x % 2 == 0)
    assert_that(evens.to.list() == [2, 4, 6, 8], "matched side")
    assert_that(odds.to.list() == [1, 3, 5, 7], "unmatched side")
    assert_that(evens.to.list() == [2, 4, 6, 8], "each side can be traversed again")


# --- chunking ---

@test("chunk groups consecutive elements with a shorter tail")
def test_chunk():
    assert_that(one_to_eight.group.chunk(3).to.list() == [[1, 2, 3], [4, 5, 6], [7, 8]], "size 3")
    assert_that(one_to_eight.group.chunk(8).to.list() == [list(range(1, 9))], "one full chunk")
    assert_that(one_to_eight.group.chunk(20).to.list() == [list(range(1, 9))], "one short chunk")
    assert_that(empty().group.chunk(3).to.list() == [], "no chunks from nothing")


@test("chunk sizes follow from the total count")
def test_chunk_sizes():
    for n in range(0, 12):
        for k in (1, 2, 3, 5):
            sizes = from_range(0, n).group.chunk(k).select(len).to.list()
            assert_that(len(sizes) == -(-n // k), f"chunk count for n={n} k={k}")
            assert_that(all(size == k for size in sizes[:-1]), f"full chunks for n={n} k={k}")
            if sizes:
                assert_that(sizes[-1] == (n % k or k), f"tail size for n={n} k={k}")


@test("chunks never share storage")
def test_chunk_independence():
    first, second = one_to_eight.group.chunk(4).to.list()
    first.append(99)
    first[0] = -1
    assert_that(second == [5, 6, 7, 8], "mutating one chunk leaves the next alone")


@test("chunk stays lazy over an infinite source")
def test_chunk_infinite():
    events = []
    chunks = tracked(range(10 ** 9), events).group.chunk(2).take(2).to.list()
    assert_that(chunks == [[0, 1], [2, 3]], "two chunks")
    assert_that(events == [0, 1, 2, 3, 'closed'], "no element of a third chunk is read")


@test("chunks yields nested sequences and chunk_list collects them")
def test_chunks():
    nested = one_to_eight.group.chunks(3)
    assert_that(nested.select(lambda c: c.to.list()).to.list() == [[1, 2, 3], [4, 5, 6], [7, 8]], "nested")
    parts = one_to_eight.group.chunk_list(3)
    assert_that(len(parts) == 3 and parts[2].to.list() == [7, 8], "collected eagerly")


@test("non-positive chunk sizes are rejected up front")
def test_chunk_invalid():
    assert_raises(InvalidArgumentError, lambda: one_to_eight.group.chunk(0), "chunk(0)")
    assert_raises(InvalidArgumentError, lambda: one_to_eight.group.chunks(0), "chunks(0)")
    assert_raises(InvalidArgumentError, lambda: one_to_eight.group.chunk_list(-1), "chunk_list(-1)")


# --- flatten ---

@test("flatten concatenates in argument order")
def test_flatten():
    assert_that(flatten([1, 2], S([3]), empty(), (4, 5)).to.list() == [1, 2, 3, 4, 5], "all parts")
    assert_that(flatten().to.list() == [], "no parts")


@test("flatten of chunks restores the source")
def test_flatten_chunks():
    for k in (1, 3, 4, 10):
        parts = one_to_eight.group.chunk_list(k)
        assert_that(flatten(*parts).to.list() == list(range(1, 9)), f"round trip for k={k}")


@test("flatten never starts parts after an early stop")
def test_flatten_early_stop():
    first_events, later_events = [], []
    result = flatten(tracked([1, 2, 3], first_events), tracked([4, 5], later_events)).take(2).to.list()
    assert_that(result == [1, 2], "two elements")
    assert_that(first_events == [1, 2, 'closed'], "first part closed after the stop")
    assert_that(later_events == [], "second part untouched")


@test("flatten with an infinite part is bounded by take")
def test_flatten_infinite():
    result = flatten([0], generate(lambda: 7)).take(4).to.list()
    assert_that(result == [0, 7, 7, 7], "infinite tail")


if __name__ == "__main__":
    suite.main(title="seqy grouping test suite")
