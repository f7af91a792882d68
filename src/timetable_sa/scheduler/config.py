"""Algorithm and time-slot configuration.

Every field has a default; a partial mapping passed to :func:`merge_config`
is layered over those defaults, so omitting a field always reproduces the
default behaviour. Values are validated here, before the search starts.
"""

import json
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from ..constants import SHIFT_ALIASES, Shift
from ..exceptions import InvalidConfigError, InvalidTimeError
from ..utils import snake_case
from .constants import DEFAULT_DAYS
from .models import TimeSlot
from .utils import time_to_minutes


@dataclass(frozen=True)
class ShiftConfig:
    """Generation settings for one shift."""

    start_time: str
    end_time: str
    slot_duration: int = 50

    def validate(self, name: str = "shift") -> None:
        for attr in ("start_time", "end_time"):
            try:
                time_to_minutes(getattr(self, attr))
            except InvalidTimeError as e:
                raise InvalidConfigError(str(e), f"{name}.{attr}") from e
        if self.slot_duration <= 0:
            raise InvalidConfigError("slot duration must be positive", f"{name}.slot_duration")


DEFAULT_MORNING_CONFIG = ShiftConfig(start_time="07:30", end_time="17:00", slot_duration=50)
DEFAULT_EVENING_CONFIG = ShiftConfig(start_time="15:30", end_time="21:00", slot_duration=50)


@dataclass
class SoftConstraintWeights:
    """Penalty weight for each soft constraint."""

    preferred_time: float = 10
    preferred_room: float = 5
    transit_time: float = 20
    compactness: float = 8
    prayer_time_overlap: float = 15
    evening_class_priority: float = 25
    lab_requirement: float = 10
    # Accepted in config files but not scored: no soft rule measures room overflow.
    overflow_penalty: float = 5

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    def scored(self) -> dict[str, float]:
        """Weights of the soft rules that contribute to fitness."""
        weights = self.to_dict()
        del weights["overflow_penalty"]
        return weights


@dataclass
class TimeSlotConfig:
    """Merge-mode slot generation settings."""

    morning: ShiftConfig = DEFAULT_MORNING_CONFIG
    evening: ShiftConfig = DEFAULT_EVENING_CONFIG
    days: list[str] = field(default_factory=lambda: list(DEFAULT_DAYS))

    def for_shift(self, shift: Shift) -> ShiftConfig:
        return self.evening if shift == Shift.EVENING else self.morning


@dataclass
class CustomTimeSlots:
    """Full-override slot lists; a shift left as None gets no slots."""

    morning: list[TimeSlot] | None = None
    evening: list[TimeSlot] | None = None


@dataclass
class AlgorithmConfig:
    """Tuning for the simulated annealing solver."""

    initial_temperature: float = 10000.0
    min_temperature: float = 0.0000001
    cooling_rate: float = 0.997
    max_iterations: int = 15000
    reheating_threshold: int = 1200
    reheating_factor: float = 100.0
    max_reheats: int = 7
    hard_constraint_weight: float = 100000.0
    soft_constraint_weights: SoftConstraintWeights = field(default_factory=SoftConstraintWeights)
    time_slot_config: TimeSlotConfig = field(default_factory=TimeSlotConfig)
    custom_time_slots: CustomTimeSlots | None = None

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            InvalidConfigError: If any value is out of range
        """
        if self.initial_temperature <= 0:
            raise InvalidConfigError("must be positive", "initial_temperature")
        if self.min_temperature < 0:
            raise InvalidConfigError("must not be negative", "min_temperature")
        if not 0 < self.cooling_rate < 1:
            raise InvalidConfigError("must be between 0 and 1 (exclusive)", "cooling_rate")
        if self.max_iterations < 0:
            raise InvalidConfigError("must not be negative", "max_iterations")
        if self.reheating_threshold < 1:
            raise InvalidConfigError("must be at least 1", "reheating_threshold")
        if self.reheating_factor < 1:
            raise InvalidConfigError("must be at least 1", "reheating_factor")
        if self.max_reheats < 0:
            raise InvalidConfigError("must not be negative", "max_reheats")
        if self.hard_constraint_weight < 0:
            raise InvalidConfigError("must not be negative", "hard_constraint_weight")
        for name, weight in self.soft_constraint_weights.to_dict().items():
            if weight < 0:
                raise InvalidConfigError("must not be negative", f"soft_constraint_weights.{name}")

        self.time_slot_config.morning.validate("time_slot_config.morning")
        self.time_slot_config.evening.validate("time_slot_config.evening")
        if not self.time_slot_config.days:
            raise InvalidConfigError("at least one day is required", "time_slot_config.days")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        data = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("soft_constraint_weights", "time_slot_config", "custom_time_slots")
        }
        data["soft_constraint_weights"] = self.soft_constraint_weights.to_dict()
        data["time_slot_config"] = {
            "morning": asdict(self.time_slot_config.morning),
            "evening": asdict(self.time_slot_config.evening),
            "days": list(self.time_slot_config.days),
        }
        if self.custom_time_slots is not None:
            data["custom_time_slots"] = {
                "morning": _slots_to_dicts(self.custom_time_slots.morning),
                "evening": _slots_to_dicts(self.custom_time_slots.evening),
            }
        else:
            data["custom_time_slots"] = None
        return data


NUMERIC_FIELDS = {
    "initial_temperature": float,
    "min_temperature": float,
    "cooling_rate": float,
    "max_iterations": int,
    "reheating_threshold": int,
    "reheating_factor": float,
    "max_reheats": int,
    "hard_constraint_weight": float,
}


def merge_config(user_config: "dict[str, Any] | AlgorithmConfig | None" = None) -> AlgorithmConfig:
    """Merge a user configuration over the defaults.

    Accepts snake_case or camelCase keys; shifts may be named ``pagi``/``sore``
    or ``morning``/``evening``. The defaults are never mutated.

    Example:
        >>> config = merge_config({"timeSlotConfig": {"pagi": {"startTime": "08:00"}}})
        >>> config.time_slot_config.morning
        ShiftConfig(start_time='08:00', end_time='17:00', slot_duration=50)

    Raises:
        InvalidConfigError: On unknown keys or out-of-range values
    """
    if isinstance(user_config, AlgorithmConfig):
        user_config.validate()
        return user_config

    config = AlgorithmConfig()
    for raw_key, value in (user_config or {}).items():
        key = snake_case(raw_key)
        if value is None and key != "custom_time_slots":
            continue
        if key in NUMERIC_FIELDS:
            setattr(config, key, _coerce(value, NUMERIC_FIELDS[key], key))
        elif key == "soft_constraint_weights":
            config.soft_constraint_weights = _merge_weights(value)
        elif key == "time_slot_config":
            config.time_slot_config = _merge_time_slot_config(value)
        elif key == "custom_time_slots":
            config.custom_time_slots = _parse_custom_slots(value)
        else:
            raise InvalidConfigError("unknown setting", raw_key)

    config.validate()
    return config


def load_config(path: Path | str) -> AlgorithmConfig:
    """Load a JSON configuration file and merge it over the defaults."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidConfigError(f"cannot read configuration file: {e}", str(path)) from e
    if not isinstance(data, dict):
        raise InvalidConfigError("top-level value must be an object", str(path))
    return merge_config(data)


def _coerce(value: Any, cast: type, key: str) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError(f"expected a number, got {value!r}", key) from e


def _merge_weights(value: dict[str, Any]) -> SoftConstraintWeights:
    weights = SoftConstraintWeights()
    known = {f.name for f in fields(weights)}
    for raw_key, weight in value.items():
        key = snake_case(raw_key)
        if key not in known:
            raise InvalidConfigError("unknown soft constraint", f"soft_constraint_weights.{raw_key}")
        if weight is not None:
            setattr(weights, key, _coerce(weight, float, f"soft_constraint_weights.{key}"))
    return weights


def _shift_attr(raw_key: str, section: str) -> str:
    shift = SHIFT_ALIASES.get(raw_key.strip().lower())
    if shift is None:
        raise InvalidConfigError("unknown shift", f"{section}.{raw_key}")
    return "evening" if shift == Shift.EVENING else "morning"


def _merge_time_slot_config(value: dict[str, Any]) -> TimeSlotConfig:
    slot_config = TimeSlotConfig()
    for raw_key, override in value.items():
        if override is None:
            continue
        if snake_case(raw_key) == "days":
            slot_config.days = [str(day) for day in override] or list(DEFAULT_DAYS)
            continue

        attr = _shift_attr(raw_key, "time_slot_config")
        base = getattr(slot_config, attr)
        changes = {}
        for setting_key, setting in override.items():
            name = snake_case(setting_key)
            if name not in ("start_time", "end_time", "slot_duration"):
                raise InvalidConfigError("unknown setting", f"time_slot_config.{raw_key}.{setting_key}")
            if setting is None:
                continue
            if name == "slot_duration":
                setting = _coerce(setting, int, f"time_slot_config.{raw_key}.slot_duration")
            changes[name] = setting
        setattr(slot_config, attr, replace(base, **changes))
    return slot_config


def _parse_custom_slots(value: "dict[str, Any] | CustomTimeSlots | None") -> CustomTimeSlots | None:
    if value is None or isinstance(value, CustomTimeSlots):
        return value

    custom = CustomTimeSlots()
    for raw_key, slots in value.items():
        attr = _shift_attr(raw_key, "custom_time_slots")
        if slots is None:
            continue
        try:
            parsed = [
                slot if isinstance(slot, TimeSlot) else TimeSlot.from_dict(slot)
                for slot in slots
            ]
        except (InvalidTimeError, KeyError) as e:
            raise InvalidConfigError(f"bad time slot ({e})", f"custom_time_slots.{raw_key}") from e
        setattr(custom, attr, parsed)
    return custom


def _slots_to_dicts(slots: list[TimeSlot] | None) -> list[dict[str, Any]] | None:
    if slots is None:
        return None
    return [slot.to_dict() for slot in slots]
