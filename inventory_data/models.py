"""Value types shared by the store, ranking and projection modules."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DateRange:
    """An inclusive (start, end) pair of ISO `YYYY-MM-DD` date strings.

    ISO dates order correctly as plain strings, so comparisons never parse them.
    """

    start: str
    end: str

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Invalid date range: start {self.start} is after end {self.end}")

    def contains(self, date) -> bool:
        return self.start <= date <= self.end

    @classmethod
    def from_indices(cls, dates, positions):
        """Map a pair of slider positions onto the known dates.

        Positions are rounded, clamped to the available indices and swapped
        if given in reverse order.

        Args:
            dates (Sequence[str]): Ordered known dates.
            positions (Sequence[float]): Two slider positions.

        Returns:
            DateRange: Range spanning the two referenced dates.

        Raises:
            ValueError: If `dates` is empty.
        """
        if not dates:
            raise ValueError("Cannot build a date range without any dates")
        last = len(dates) - 1
        low, high = sorted(min(max(int(round(p)), 0), last) for p in positions)
        return cls(dates[low], dates[high])

    def to_indices(self, dates):
        """Return the slider positions of this range within `dates`.

        Raises:
            ValueError: If either endpoint is not one of `dates`.
        """
        dates = list(dates)
        try:
            return [dates.index(self.start), dates.index(self.end)]
        except ValueError:
            raise ValueError(
                f"Date range {self.start}..{self.end} does not match the loaded dates"
            )

    def to_dict(self):
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data):
        if not data:
            return None
        return cls(data["start"], data["end"])


@dataclass(frozen=True)
class RankedEntry:
    """A series name with its reading in one snapshot."""

    name: str
    value: float | None
