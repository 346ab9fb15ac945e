"""
AsyncUnit - async task runner and grouped test engine.

This package provides tools to:
- Run a unit of callback-style work with a timeout race and cancellation
- Register named groups of test procedures, optionally with async set up
- Select groups, tests and parameter sets to run
- Publish results incrementally to an observer
"""

__version__ = "0.1.0"
__author__ = "AsyncUnit Team"
