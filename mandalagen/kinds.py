"""The closed set of pattern kinds the engine can render."""

from enum import Enum
from typing import Union

from .errors import UnknownPatternKindError


class PatternKind(Enum):
    MANDALA = "mandala"
    GEOMETRIC = "geometric"
    FLORAL = "floral"
    ABSTRACT = "abstract"
    WAVES = "waves"
    DOTS = "dots"
    LINES = "lines"
    MIXED = "mixed"

    @property
    def title(self) -> str:
        """Display name, as stored with saved artwork ("Mandala", "Waves", ...)."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Union["PatternKind", str]) -> "PatternKind":
        """Accept a PatternKind or its name in any letter case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for kind in cls:
                if kind.value == key:
                    return kind
        raise UnknownPatternKindError(
            f"Unknown pattern kind: {value!r}. Choose from {[k.value for k in cls]}"
        )
