import os
import logging
from dataclasses import dataclass, replace, asdict

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidArgumentError(f"{name} must be a number, got {raw!r}")


_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise InvalidArgumentError(f"{name} must be a boolean (true/false, 1/0, yes/no, on/off), got {raw!r}")


@dataclass(frozen=True)
class SeqyConfig:
    """tuning knobs for the blocking parts of seqy (zip producers, channels, cancellation)"""
    poll_interval: float = 0.01   # how long a blocked put/get waits before re-checking stop signals
    handoff_size: int = 1         # capacity of each zip producer's hand-off queue
    join_timeout: float = 1.0     # how long release waits for a producer thread to exit
    csv_log_skipped: bool = True

    def __post_init__(self):
        if self.poll_interval <= 0:
            raise InvalidArgumentError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.handoff_size <= 0:
            raise InvalidArgumentError(f"handoff_size must be positive, got {self.handoff_size}")
        if self.join_timeout < 0:
            raise InvalidArgumentError(f"join_timeout must not be negative, got {self.join_timeout}")

    @classmethod
    def from_env(cls) -> 'SeqyConfig':
        """defaults, overridden by SEQY_POLL_INTERVAL / SEQY_HANDOFF_SIZE /
        SEQY_JOIN_TIMEOUT / SEQY_CSV_LOG_SKIPPED"""
        return cls(
            poll_interval=_env_float('SEQY_POLL_INTERVAL', cls.poll_interval),
            handoff_size=int(_env_float('SEQY_HANDOFF_SIZE', cls.handoff_size)),
            join_timeout=_env_float('SEQY_JOIN_TIMEOUT', cls.join_timeout),
            csv_log_skipped=_env_bool('SEQY_CSV_LOG_SKIPPED', cls.csv_log_skipped),
        )


_active_config = SeqyConfig.from_env()


def get_config() -> SeqyConfig:
    """the config used by sequences when they start a traversal"""
    return _active_config


def configure(**overrides) -> SeqyConfig:
    """replace fields of the active config, returning the new one"""
    global _active_config
    _active_config = replace(_active_config, **overrides)
    logger.debug(f"seqy config: {asdict(_active_config)}")
    return _active_config


def reset_config() -> SeqyConfig:
    """restore the environment-derived defaults"""
    global _active_config
    _active_config = SeqyConfig.from_env()
    return _active_config
