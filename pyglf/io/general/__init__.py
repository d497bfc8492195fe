"""
Common input/output functionality shared by the format specific readers.
"""

__classification__ = "UNCLASSIFIED"
