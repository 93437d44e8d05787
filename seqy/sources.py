import csv
import typing
import logging
from .types import *
from .errors import InvalidArgumentError
from .config import get_config
from .channel import Channel
from .factories import _cancelled

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable

logger = logging.getLogger(__name__)


def from_channel(channel: Channel[T], cancel: Optional[CancelSignal] = None) -> 'Enumerable[T]':
    """
    consume a channel until it is closed and drained. with cancel, each receive
    races the cancel signal and the sequence ends as soon as it fires.
    """
    from .enumerable import Enumerable
    def channel_data():
        while True:
            if cancel is None:
                item, ok = channel.receive()
            else:
                item, ok = channel.receive_or_cancel(cancel)
            if not ok:
                return
            yield item
    return Enumerable(channel_data)


def _strip_line(line: Union[str, bytes]) -> str:
    if isinstance(line, bytes):
        line = line.decode('utf-8')
    if line.endswith('\n'):
        line = line[:-1]
    if line.endswith('\r'):
        line = line[:-1]
    return line


def from_reader(stream: Iterable[Union[str, bytes]], cancel: Optional[CancelSignal] = None) -> 'Enumerable[str]':
    """
    lines of a text or binary stream without their line terminators. the stream is
    read lazily and never closed here; its owner closes it.
    """
    from .enumerable import Enumerable
    def reader_data():
        for line in stream:
            if _cancelled(cancel):
                logger.debug("from_reader stopped by cancellation")
                return
            yield _strip_line(line)
    return Enumerable(reader_data)


def _read_records(reader: Iterator[List[str]], cancel: Optional[CancelSignal]) -> Iterator[List[str]]:
    """parsed records until end-of-input or cancellation, skipping malformed ones"""
    log_skipped = get_config().csv_log_skipped
    while not _cancelled(cancel):
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            if log_skipped:
                logger.debug(f"skipping malformed csv record: {e}")
            continue
        yield record
    logger.debug("csv source stopped by cancellation")


def from_csv(reader: Iterator[List[str]], cancel: Optional[CancelSignal] = None) -> 'Enumerable[List[str]]':
    """
    records of a csv reader as lists of fields. malformed records are skipped and the
    traversal carries on; there is no way to learn how many were skipped.
    """
    from .enumerable import Enumerable
    return Enumerable(lambda: _read_records(reader, cancel))


def from_csv_with_headers(reader: Iterator[List[str]],
                          cancel: Optional[CancelSignal] = None) -> Tuple['Enumerable[Row]', List[str]]:
    """
    read the first record as column names (eagerly) and return the remaining records,
    lazily, as Row values that support row[i] and row['column'] lookups.
    raises InvalidArgumentError when the header record is missing or malformed.
    """
    from .enumerable import Enumerable
    try:
        headers = next(reader)
    except StopIteration:
        raise InvalidArgumentError("csv input has no header record")
    except csv.Error as e:
        raise InvalidArgumentError(f"csv header record is malformed: {e}") from e

    def rows_data():
        for index, record in enumerate(_read_records(reader, cancel)):
            yield Row(record, index, headers)

    return Enumerable(rows_data), headers
