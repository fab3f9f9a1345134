from .event_log import EventLog
from .time import format_ts_utc_z, now_ts_utc_z, utc_now

__all__ = [
    "EventLog",
    "format_ts_utc_z",
    "now_ts_utc_z",
    "utc_now",
]
