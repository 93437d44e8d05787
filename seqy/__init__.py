r"""
'     ____  ____  ____  _  _
'    / ___)(  __)/  _ \( \/ )
'    \___ \ ) _) ) (_) ))  /
'    (____/(____)\___\_)(__/
"""

# expose the main class
from .enumerable import Enumerable

# expose the factory functions
from .factories import (
    from_iterable,
    as_enumerable,
    from_range,
    range_step,
    repeat,
    empty,
    generate,
    from_func,
    flatten,
    seqy,
    S,
)

# expose the source adapters
from .sources import (
    from_channel,
    from_reader,
    from_csv,
    from_csv_with_headers,
)

# expose supporting data classes
from .types import Pair, Triple, Row
from .channel import Channel, CancellationToken
from .errors import SeqyError, InvalidStateError, InvalidArgumentError
from .config import SeqyConfig, get_config, configure, reset_config

# define what `import *` does
__all__ = [
    "Enumerable",
    "from_iterable",
    "as_enumerable",
    "from_range",
    "range_step",
    "repeat",
    "empty",
    "generate",
    "from_func",
    "flatten",
    "seqy",
    "S",
    "from_channel",
    "from_reader",
    "from_csv",
    "from_csv_with_headers",
    "Pair",
    "Triple",
    "Row",
    "Channel",
    "CancellationToken",
    "SeqyError",
    "InvalidStateError",
    "InvalidArgumentError",
    "SeqyConfig",
    "get_config",
    "configure",
    "reset_config",
]
