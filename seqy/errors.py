class SeqyError(Exception):
    """base class for every error raised by seqy."""
    pass


class InvalidStateError(SeqyError, RuntimeError):
    """an operation was used when the sequence (or channel) is not in a state that allows it."""
    pass


class InvalidArgumentError(SeqyError, ValueError):
    """an argument violates a precondition, e.g. a non-positive chunk or step size."""
    pass
