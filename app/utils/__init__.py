"""
UTILITIES PACKAGE
=================

Helpers used by the services (no HTTP, no business logic):

  clock - MonotonicIdSource: strictly increasing message ids from a millisecond clock.
"""
