"""
Timezone conversion backed by pendulum's IANA zone database.
"""

from __future__ import annotations

import logging
from datetime import datetime

import pendulum
from pendulum import DateTime
from pendulum.tz.exceptions import InvalidTimezone

from ..domain.exceptions import InvalidInputError, InvalidZoneError


logger = logging.getLogger(__name__)


class ZoneConverter:
    """
    Converts between wall-clock time in a named zone and absolute (UTC) time.

    DST rules are applied by pendulum for the calendar date in question, so
    callers should always go through this class rather than adding offsets
    by hand.
    """

    def is_valid_zone(self, zone_id: str) -> bool:
        """Return True if ``zone_id`` names a zone pendulum can load."""
        if not isinstance(zone_id, str) or not zone_id.strip():
            return False

        try:
            pendulum.timezone(zone_id)
        except (InvalidTimezone, ValueError, KeyError, OSError):
            return False

        return True

    def current_time(self, zone_id: str) -> DateTime:
        """Get the current wall-clock time in a zone."""
        return pendulum.now(self._require_zone(zone_id))

    def to_absolute(self, civil: datetime | str, zone_id: str) -> DateTime:
        """
        Interpret the wall-clock fields of ``civil`` as local time in ``zone_id``.

        Any zone already attached to ``civil`` is ignored.

        Args:
            civil: datetime or ISO-8601 string
            zone_id: IANA timezone identifier

        Returns:
            The matching instant in UTC

        Raises:
            InvalidZoneError: If the zone is unknown
            InvalidInputError: If civil is not a well-formed date/time
        """
        tz = self._require_zone(zone_id)
        wall = self._parse_civil(civil)

        local = pendulum.datetime(
            wall.year,
            wall.month,
            wall.day,
            wall.hour,
            wall.minute,
            wall.second,
            wall.microsecond,
            tz=tz,
        )

        return local.in_timezone("UTC")

    def to_zone(self, instant: datetime, zone_id: str) -> DateTime:
        """
        Render an absolute instant as wall-clock time in ``zone_id``.

        Naive datetimes are read as UTC.
        """
        tz = self._require_zone(zone_id)

        if not isinstance(instant, datetime):
            raise InvalidInputError(f"Invalid datetime provided for conversion: {instant!r}")

        return pendulum.instance(instant).in_timezone(tz)

    def offset_minutes(self, zone_id: str, instant: datetime | None = None) -> int:
        """
        Signed UTC offset of ``zone_id`` in minutes, east of UTC positive.

        Args:
            zone_id: IANA timezone identifier
            instant: Moment to evaluate the offset at (default: now)
        """
        if instant is None:
            local = self.current_time(zone_id)
        else:
            local = self.to_zone(instant, zone_id)

        return round(local.utcoffset().total_seconds() / 60)

    def observes_dst(self, zone_id: str, year: int) -> bool:
        """Check whether a zone's offset differs between mid-January and mid-July."""
        winter = self.to_absolute(datetime(year, 1, 15, 12), zone_id)
        summer = self.to_absolute(datetime(year, 7, 15, 12), zone_id)

        return self.offset_minutes(zone_id, winter) != self.offset_minutes(zone_id, summer)

    def _require_zone(self, zone_id: str):
        if not self.is_valid_zone(zone_id):
            raise InvalidZoneError("timezone", zone_id)
        return pendulum.timezone(zone_id)

    @staticmethod
    def _parse_civil(civil: datetime | str) -> datetime:
        if isinstance(civil, datetime):
            return civil

        if isinstance(civil, str):
            try:
                parsed = pendulum.parse(civil)
            except ValueError as exc:
                raise InvalidInputError(f"Invalid date/time: {civil!r}") from exc

            if isinstance(parsed, datetime):
                return parsed

        logger.debug("Rejected civil date/time %r", civil)
        raise InvalidInputError(f"Invalid date/time: {civil!r}")
