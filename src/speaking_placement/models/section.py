"""Test section identifiers."""

from enum import StrEnum


class SectionId(StrEnum):
    """Placement test parts."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"

    @property
    def label(self) -> str:
        return SECTION_LABELS[self]

    @classmethod
    def parse(cls, value: "SectionId | str | None") -> "SectionId | None":
        """Resolve a section letter, returning None for anything unknown."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


SECTION_LABELS: dict[SectionId, str] = {
    SectionId.A: "Short Questions",
    SectionId.B: "Conversation",
    SectionId.C: "Read and Speak",
    SectionId.D: "Listen and Repeat",
    SectionId.E: "Fill the Blanks",
    SectionId.F: "Correct the Sentence",
    SectionId.G: "Free Speech",
}
