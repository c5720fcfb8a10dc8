"""Conversion between WGS84 latitude/longitude and UTM coordinates."""

from __future__ import annotations

import math

K0 = 0.9996
E = 0.00669438
R = 6378137

_E2 = E * E
_E3 = _E2 * E
_E_P2 = E / (1.0 - E)

_SQRT_E = math.sqrt(1 - E)

_FE = (1 - _SQRT_E) / (1 + _SQRT_E)
_FE2 = _FE * _FE
_FE3 = _FE2 * _FE
_FE4 = _FE3 * _FE
_FE5 = _FE4 * _FE

_M1 = 1 - E / 4 - 3 * _E2 / 64 - 5 * _E3 / 256
_M2 = 3 * E / 8 + 3 * _E2 / 32 + 45 * _E3 / 1024
_M3 = 15 * _E2 / 256 + 45 * _E3 / 1024
_M4 = 35 * _E3 / 3072

_P2 = 3.0 / 2 * _FE - 27.0 / 32 * _FE3 + 269.0 / 512 * _FE5
_P3 = 21.0 / 16 * _FE2 - 55.0 / 32 * _FE4
_P4 = 151.0 / 96 * _FE3 - 417.0 / 128 * _FE5
_P5 = 1097.0 / 512 * _FE4

_DEGREE = math.pi / 180

_ZONE_LETTERS = (
    (84, " "),
    (72, "X"),
    (64, "W"),
    (56, "V"),
    (48, "U"),
    (40, "T"),
    (32, "S"),
    (24, "R"),
    (16, "Q"),
    (8, "P"),
    (0, "N"),
    (-8, "M"),
    (-16, "L"),
    (-24, "K"),
    (-32, "J"),
    (-40, "H"),
    (-48, "G"),
    (-56, "F"),
    (-64, "E"),
    (-72, "D"),
    (-80, "C"),
)


class UTMInputError(ValueError):
    """Raised when UTM or latitude/longitude input is out of range."""


def _rad(degrees: float) -> float:
    return degrees * _DEGREE


def _deg(radians: float) -> float:
    return radians / _DEGREE


def to_lat_lon(
    easting: float,
    northing: float,
    zone_number: int,
    zone_letter: str | None = None,
    northern: bool | None = None,
) -> tuple[float, float]:
    """Convert UTM coordinates to (latitude, longitude).

    Exactly one of ``zone_letter`` and ``northern`` must be given.
    """
    has_letter = bool(zone_letter)
    has_northern = northern is not None

    if not has_letter and not has_northern:
        raise UTMInputError("either zone_letter or northern needs to be set")
    if has_letter and has_northern:
        raise UTMInputError("set either zone_letter or northern, but not both")
    if not 100000 <= easting < 1000000:
        raise UTMInputError(
            "easting out of range (must be between 100.000 m and 999.999 m"
        )
    if not 0 <= northing <= 10000000:
        raise UTMInputError(
            "northing out of range (must be between 0 m and 10.000.000 m)"
        )
    if not 1 <= zone_number <= 60:
        raise UTMInputError("zone number out of range (must be between 1 and 60)")

    if has_letter:
        letter = zone_letter[0].upper()
        if not "C" <= letter <= "X" or letter in ("I", "O"):
            raise UTMInputError("zone letter out of range (must be between C and X)")
        northern_value = letter >= "N"
    else:
        northern_value = bool(northern)

    x = easting - 500000
    y = northing if northern_value else northing - 10000000

    m = y / K0
    mu = m / (R * _M1)

    p_rad = (
        mu
        + _P2 * math.sin(2 * mu)
        + _P3 * math.sin(4 * mu)
        + _P4 * math.sin(6 * mu)
        + _P5 * math.sin(8 * mu)
    )

    p_sin = math.sin(p_rad)
    p_sin2 = p_sin * p_sin
    p_cos = math.cos(p_rad)

    p_tan = p_sin / p_cos
    p_tan2 = p_tan * p_tan
    p_tan4 = p_tan2 * p_tan2

    ep_sin = 1 - E * p_sin2
    ep_sin_sqrt = math.sqrt(1 - E * p_sin2)

    n = R / ep_sin_sqrt
    rad = (1 - E) / ep_sin

    c = _FE * p_cos * p_cos
    c2 = c * c

    d = x / (n * K0)
    d2 = d * d
    d3 = d2 * d
    d4 = d3 * d
    d5 = d4 * d
    d6 = d5 * d

    latitude = (
        p_rad
        - (p_tan / rad)
        * (d2 / 2 - d4 / 24 * (5 + 3 * p_tan2 + 10 * c - 4 * c2 - 9 * _E_P2))
        + d6 / 720 * (61 + 90 * p_tan2 + 298 * c + 45 * p_tan4 - 252 * _E_P2 - 3 * c2)
    )

    longitude = (
        d
        - d3 / 6 * (1 + 2 * p_tan2 + c)
        + d5 / 120 * (5 - 2 * c + 28 * p_tan2 - 3 * c2 + 8 * _E_P2 + 24 * p_tan4)
    ) / p_cos

    return (
        _deg(latitude),
        _deg(longitude) + zone_number_to_central_longitude(zone_number),
    )


def validate_lat_lon(latitude: float, longitude: float) -> None:
    """Raise UTMInputError unless the coordinates lie in the UTM domain."""
    if not -80.0 <= latitude <= 84.0:
        raise UTMInputError(
            "latitude out of range (must be between 80 deg S and 84 deg N)"
        )
    if not -180.0 <= longitude <= 180.0:
        raise UTMInputError(
            "longitude out of range (must be between 180 deg W and 180 deg E)"
        )


def from_lat_lon(
    latitude: float, longitude: float, northern: bool = False
) -> tuple[float, float, int, str]:
    """Convert latitude/longitude to (easting, northing, zone number, zone letter).

    With ``northern`` set, the letter is "N" for positive latitudes and "S" otherwise.
    """
    validate_lat_lon(latitude, longitude)

    lat_rad = _rad(latitude)
    lat_sin = math.sin(lat_rad)
    lat_cos = math.cos(lat_rad)

    lat_tan = lat_sin / lat_cos
    lat_tan2 = lat_tan * lat_tan
    lat_tan4 = lat_tan2 * lat_tan2

    zone_number = lat_lon_to_zone_number(latitude, longitude)
    zone_letter = latitude_to_zone_letter(latitude)
    if northern:
        zone_letter = "N" if latitude > 0 else "S"

    lon_rad = _rad(longitude)
    central_lon_rad = _rad(float(zone_number_to_central_longitude(zone_number)))

    n = R / math.sqrt(1 - E * lat_sin * lat_sin)
    c = _E_P2 * lat_cos * lat_cos

    a = lat_cos * (lon_rad - central_lon_rad)
    a2 = a * a
    a3 = a2 * a
    a4 = a3 * a
    a5 = a4 * a
    a6 = a5 * a

    m = R * (
        _M1 * lat_rad
        - _M2 * math.sin(2 * lat_rad)
        + _M3 * math.sin(4 * lat_rad)
        - _M4 * math.sin(6 * lat_rad)
    )

    easting = (
        K0
        * n
        * (
            a
            + a3 / 6 * (1 - lat_tan2 + c)
            + a5 / 120 * (5 - 18 * lat_tan2 + lat_tan4 + 72 * c - 58 * _E_P2)
        )
        + 500000
    )
    northing = K0 * (
        m
        + n
        * lat_tan
        * (
            a2 / 2
            + a4 / 24 * (5 - lat_tan2 + 9 * c + 4 * c * c)
            + a6 / 720 * (61 - 58 * lat_tan2 + lat_tan4 + 600 * c - 330 * _E_P2)
        )
    )

    if latitude < 0:
        northing += 10000000

    return easting, northing, zone_number, zone_letter


def latitude_to_zone_letter(latitude: float) -> str:
    """The latitude band letter, or a space outside the UTM bands."""
    for zone, letter in _ZONE_LETTERS:
        if latitude >= zone:
            return letter
    return " "


def lat_lon_to_zone_number(latitude: float, longitude: float) -> int:
    """The UTM zone number, honouring the Norway and Svalbard exceptions."""
    if 56 <= latitude <= 64 and 3 <= longitude <= 12:
        return 32

    if 72 <= latitude <= 84 and longitude >= 0:
        if longitude <= 9:
            return 31
        if longitude <= 21:
            return 33
        if longitude <= 33:
            return 35
        if longitude <= 42:
            return 37

    return int((longitude + 180) / 6) + 1


def zone_number_to_central_longitude(zone_number: int) -> int:
    return (zone_number - 1) * 6 - 180 + 3