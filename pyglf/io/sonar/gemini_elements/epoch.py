"""
The Tritech Gemini time origin. Gemini timestamps count seconds from
1980-01-01 00:00:00 in UK local time. British Summer Time was not in effect at
that instant, so the origin coincides with 1980-01-01T00:00:00Z.
"""

__classification__ = "UNCLASSIFIED"
__author__ = "Benjamin Blundell"

from datetime import datetime, timedelta

import pytz


_UK_ZONE = pytz.timezone('Europe/London')
_EPOCH = _UK_ZONE.localize(datetime(1980, 1, 1, 0, 0, 0)).astimezone(pytz.utc)


def gemini_epoch() -> datetime:
    """
    The Gemini epoch, constructed in UK local time and expressed in UTC.

    Returns
    -------
    datetime
        Timezone aware, with `tzinfo=pytz.utc`.
    """

    return _EPOCH


def gemini_time(seconds: float) -> datetime:
    """
    Convert seconds since the Gemini epoch to a UTC datetime, at millisecond
    precision. The conversion uses python :func:`round`, so exact half
    milliseconds round to even. Negative values are clamped to the epoch.

    Parameters
    ----------
    seconds : float

    Returns
    -------
    datetime
    """

    millis = max(0, int(round(seconds*1000)))
    return gemini_epoch() + timedelta(milliseconds=millis)
