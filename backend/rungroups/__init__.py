"""
rungroups - buckets workout history into comparable groups and ranks them.
"""

__version__ = "1.0.0"
