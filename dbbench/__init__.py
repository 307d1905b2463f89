"""
dbbench: latency microbenchmarks of database inserts and selects.
"""

__version__ = "0.1.0"
