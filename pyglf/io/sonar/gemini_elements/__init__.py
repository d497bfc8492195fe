"""
The Tritech Gemini record structures of the `.dat` stream: the CI header, the
image record and the status record, along with the Gemini time origin. The
records are built once, as the stream is parsed, and are treated as read only
afterwards.
"""

__classification__ = "UNCLASSIFIED"
