import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List

from .date_encoder import DateEncoder
from .exceptions import InvalidConfiguration
from .fields import DEFAULT_HOLIDAYS


@dataclass
class DateEncoderConfig:
    """Declarative DateEncoder settings. A width of 0 disables a field."""
    # Day of year, radius in days (91.5 = one season)
    season_width: int = 0
    season_radius: float = 91.5

    # Monday = 0
    day_of_week_width: int = 0
    day_of_week_radius: float = 1.0

    # Saturday, Sunday or Friday after 18:00
    weekend_width: int = 0
    weekend_radius: float = 1.0

    # Weekday names such as ["mon", "wed"] or ["mon,wed"]
    custom_days_width: int = 0
    custom_days: List[str] = field(default_factory=list)

    # Fixed-date holidays as [month, day]
    holiday_width: int = 0
    holiday_radius: float = 1.0
    holidays: List[List[int]] = field(default_factory=lambda: [list(h) for h in DEFAULT_HOLIDAYS])

    # Hours since midnight
    time_of_day_width: int = 0
    time_of_day_radius: float = 4.0

    name: str = ""

    def builder(self) -> DateEncoder.Builder:
        return (DateEncoder.builder()
                .season(self.season_width, self.season_radius)
                .day_of_week(self.day_of_week_width, self.day_of_week_radius)
                .weekend(self.weekend_width, self.weekend_radius)
                .custom_days(self.custom_days_width, self.custom_days)
                .holiday(self.holiday_width, self.holiday_radius, self.holidays)
                .time_of_day(self.time_of_day_width, self.time_of_day_radius)
                .name(self.name))

    def build(self) -> DateEncoder:
        return self.builder().build()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DateEncoderConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise InvalidConfiguration(f"Unknown DateEncoder settings: {', '.join(unknown)}")
        return cls(**d)


def json_dumps(d) -> str:
    return json.dumps(d, indent=2, sort_keys=True)
