"""scopelog: leveled, scoped log dispatch to independently filtered sinks.

Application code writes through one ``LogDispatcher``; each configured
sink decides, by exact level set and scope tags, which entries it gets.
  - RFC 5424 level table (names and syslog codes are interchangeable)
  - Lazy sink construction from instances, factories, classes or options
  - Bundled console (Rich), file and memory sinks
  - ``scopelog`` CLI for listing levels and emitting test entries
"""

__version__ = "0.1.0"
__description__ = "Structured log dispatcher with per-sink level and scope filters"

from scopelog.models.levels import Level, UnknownLevelError
from scopelog.routing.dispatcher import InvalidLevelError, LogDispatcher, log
from scopelog.routing.registry import SinkConstructionError, register_sink_type
from scopelog.routing.sinks import BaseSink, Sink

__all__ = [
    "LogDispatcher",
    "log",
    "Level",
    "Sink",
    "BaseSink",
    "register_sink_type",
    "InvalidLevelError",
    "SinkConstructionError",
    "UnknownLevelError",
    "__version__",
]
