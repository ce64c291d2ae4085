"""scopelog routing — dispatches log entries to matching sinks.

Sinks are pluggable targets: the console, local files, an in-memory
buffer, or any object implementing the ``Sink`` protocol.  The
``LogDispatcher`` builds them lazily from configuration and hands each
entry to every sink whose level and scope filters accept it.
"""
