"""Question schema model - pure logic, no I/O."""

from dataclasses import dataclass
from enum import Enum

from .errors import ParseError


class QuestionKind(Enum):
    """Input kinds a question can be rendered as."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    TEXTAREA = "textarea"
    SELECT = "select"
    RANGE = "range"


NUMERIC_KINDS = (QuestionKind.NUMBER, QuestionKind.RANGE)


@dataclass(frozen=True)
class QuestionDef:
    """A single configurable prompt in the check-in form."""

    key: str
    label: str
    kind: QuestionKind
    options: tuple[str, ...] | None = None
    min: float | None = None
    max: float | None = None
    step: float | None = None

    def default_value(self, today_iso: str) -> str | int | float:
        """Initial draft value for a fresh form."""
        match self.kind:
            case QuestionKind.DATE:
                return today_iso
            case QuestionKind.RANGE:
                low = self.min if self.min is not None else 1
                high = self.max if self.max is not None else 10
                return low + (high - low) // 2
            case _:
                return ""

    def to_dict(self) -> dict:
        """Serialize to the persisted record shape."""
        data: dict = {"key": self.key, "label": self.label, "type": self.kind.value}
        if self.options is not None:
            data["options"] = list(self.options)
        if self.min is not None:
            data["min"] = self.min
        if self.max is not None:
            data["max"] = self.max
        if self.step is not None:
            data["step"] = self.step
        return data

    @classmethod
    def from_dict(cls, data: object) -> "QuestionDef":
        """Build from a persisted record. Raises ParseError if malformed."""
        if not isinstance(data, dict):
            raise ParseError(f"Question must be an object, got {type(data).__name__}")

        key = data.get("key")
        label = data.get("label")
        raw_kind = data.get("type", data.get("kind"))
        if not isinstance(key, str) or not key:
            raise ParseError(f"Question is missing a string 'key': {data!r}")
        if not isinstance(label, str):
            raise ParseError(f"Question '{key}' is missing a string 'label'")
        try:
            kind = QuestionKind(raw_kind)
        except ValueError:
            raise ParseError(f"Question '{key}' has unknown type {raw_kind!r}")

        options = data.get("options")
        if options is not None:
            if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
                raise ParseError(f"Question '{key}' options must be a list of strings")
            options = tuple(options)

        bounds = {}
        for name in ("min", "max", "step"):
            value = data.get(name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise ParseError(f"Question '{key}' {name} must be a number")
            bounds[name] = value

        return cls(key=key, label=label, kind=kind, options=options, **bounds)


def parse_questions(data: object) -> list[QuestionDef]:
    """
    Validate a raw sequence of question records.

    Accepts QuestionDef instances or dict records. Duplicate keys are
    allowed; callers are responsible for keeping keys unique.
    """
    if not isinstance(data, (list, tuple)):
        raise ParseError("Questions must be an array")
    return [q if isinstance(q, QuestionDef) else QuestionDef.from_dict(q) for q in data]


def _q(key: str, label: str, kind: QuestionKind, **extra) -> QuestionDef:
    return QuestionDef(key=key, label=label, kind=kind, **extra)


DEFAULT_QUESTIONS: tuple[QuestionDef, ...] = (
    _q("date", "Date", QuestionKind.DATE),
    _q("protocol", "Protocol (e.g., Fadiman, Stamets, custom)", QuestionKind.TEXT),
    _q("dayType", "Day Type", QuestionKind.SELECT, options=("Dose", "Off", "Rest", "Integration")),
    _q("strain", "Strain / Variety (optional)", QuestionKind.TEXT),
    _q("doseMg", "Dose (mg)", QuestionKind.NUMBER, min=0, step=1),
    _q("timeTaken", "Time taken", QuestionKind.TIME),
    _q("sleepHours", "Sleep last night (hours)", QuestionKind.NUMBER, min=0, step=0.25),
    _q("caffeineMg", "Caffeine today (mg, optional)", QuestionKind.NUMBER, min=0, step=10),
    _q("intention", "Intention for today", QuestionKind.TEXTAREA),
    _q("setting", "Set & Setting (where / with whom / mindset)", QuestionKind.TEXTAREA),
    _q("mood", "Mood (1–10)", QuestionKind.RANGE, min=1, max=10),
    _q("anxiety", "Anxiety (1–10)", QuestionKind.RANGE, min=1, max=10),
    _q("focus", "Focus (1–10)", QuestionKind.RANGE, min=1, max=10),
    _q("energy", "Energy (1–10)", QuestionKind.RANGE, min=1, max=10),
    _q("sideEffects", "Side effects (free text)", QuestionKind.TEXTAREA),
    _q("activities", "Key activities (workout, study, social, therapy, etc.)", QuestionKind.TEXTAREA),
    _q("notes", "Any other observations", QuestionKind.TEXTAREA),
)
