"""
Readers for sonar log formats.
"""

__classification__ = "UNCLASSIFIED"
