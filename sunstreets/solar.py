"""
Solar position for a single instant and location.

Uses the NOAA spreadsheet algorithm (no external solar library needed).
Accuracy is well under a degree between 1950 and 2050, far finer than the
20 degree street tolerance it feeds.
"""

import math
from datetime import datetime, timezone

from .errors import InvalidHourError
from .models import SunPosition


def solar_angles(year, month, day, hour_utc, lat, lon):
    """
    Calculate solar altitude and azimuth in degrees.

    Parameters
    ----------
    year, month, day : int
        Date components (UTC).
    hour_utc : float
        Hour of day in UTC (fractional).
    lat, lon : float
        Observer latitude and longitude in degrees.

    Returns
    -------
    altitude : float
        Degrees above the horizon (negative below).
    azimuth : float
        Degrees clockwise from north (0=N, 90=E, 180=S, 270=W).
    """
    # Julian Day
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    jdn = day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045
    jd = jdn + (hour_utc - 12.0) / 24.0
    jc = (jd - 2451545.0) / 36525.0

    # Mean longitude and anomaly (degrees)
    L0 = (280.46646 + jc * (36000.76983 + 0.0003032 * jc)) % 360
    M = (357.52911 + jc * (35999.05029 - 0.0001537 * jc)) % 360
    M_rad = math.radians(M)
    ecc = 0.016708634 - jc * (0.000042037 + 0.0000001267 * jc)

    C = (math.sin(M_rad) * (1.914602 - jc * (0.004817 + 0.000014 * jc))
         + math.sin(2 * M_rad) * (0.019993 - 0.000101 * jc)
         + math.sin(3 * M_rad) * 0.000289)

    omega = 125.04 - 1934.136 * jc
    sun_app_lon = L0 + C - 0.00569 - 0.00478 * math.sin(math.radians(omega))

    obliq_mean = 23 + (26 + (21.448 - jc * (46.815 + jc * (0.00059 - jc * 0.001813))) / 60) / 60
    obliq_rad = math.radians(obliq_mean + 0.00256 * math.cos(math.radians(omega)))

    dec = math.asin(math.sin(obliq_rad) * math.sin(math.radians(sun_app_lon)))

    # Equation of time (minutes)
    y_eq = math.tan(obliq_rad / 2) ** 2
    L0_rad = math.radians(L0)
    eqt = 4 * math.degrees(
        y_eq * math.sin(2 * L0_rad)
        - 2 * ecc * math.sin(M_rad)
        + 4 * ecc * y_eq * math.sin(M_rad) * math.cos(2 * L0_rad)
        - 0.5 * y_eq * y_eq * math.sin(4 * L0_rad)
        - 1.25 * ecc ** 2 * math.sin(2 * M_rad)
    )

    # Hour angle from true solar time
    tst = (hour_utc * 60 + eqt + 4 * lon) % 1440
    ha = tst / 4 - 180
    ha_rad = math.radians(ha)
    lat_rad = math.radians(lat)

    sin_alt = (math.sin(lat_rad) * math.sin(dec)
               + math.cos(lat_rad) * math.cos(dec) * math.cos(ha_rad))
    altitude = math.degrees(math.asin(max(-1, min(1, sin_alt))))

    denom = math.cos(lat_rad) * math.cos(math.radians(altitude))
    if abs(denom) < 1e-12:
        # Pole or zenith: azimuth is undefined, pick due south
        return altitude, 180.0
    cos_az = (math.sin(dec) - math.sin(lat_rad) * sin_alt) / denom
    azimuth = math.degrees(math.acos(max(-1, min(1, cos_az))))
    if ha > 0:
        azimuth = 360 - azimuth

    return altitude, azimuth


def sun_position(instant, latitude, longitude):
    """
    Sun position for a UTC instant, as a SunPosition in radians.

    Naive datetimes are taken as UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    else:
        instant = instant.astimezone(timezone.utc)
    hour_utc = instant.hour + instant.minute / 60 + instant.second / 3600
    alt, az = solar_angles(instant.year, instant.month, instant.day,
                           hour_utc, latitude, longitude)
    return SunPosition(azimuth=math.radians(az), altitude=math.radians(alt))


def instant_for_hour(hour, today=None):
    """
    UTC instant for ``hour``:00:00 on today's (UTC) calendar date.

    The date is always the current one; only the hour of day varies.
    """
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise InvalidHourError(hour)
    if today is None:
        today = datetime.now(timezone.utc).date()
    elif isinstance(today, datetime):
        today = today.date()
    return datetime(today.year, today.month, today.day, hour, 0, 0, tzinfo=timezone.utc)
