import sys
from typing import Dict, Iterator, Optional, TextIO, Tuple


class Result:
    """
    Ordered collection of metrics produced by a tester.

    Labels keep the position of their first insertion; putting an existing
    label again replaces its value in place.
    """

    def __init__(self, values: Optional[Dict[str, int]] = None):
        self._values: Dict[str, int] = {}
        for label, value in (values or {}).items():
            self.put(label, value)

    def put(self, label: str, value: int) -> None:
        self._values[label] = int(value)

    def get(self, label: str, default: Optional[int] = None) -> Optional[int]:
        return self._values.get(label, default)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self._values.items())

    def labels(self) -> list[str]:
        return list(self._values)

    def __getitem__(self, label: str) -> int:
        return self._values[label]

    def __contains__(self, label: object) -> bool:
        return label in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Result):
            return list(self._values.items()) == list(other._values.items())
        return NotImplemented

    def __repr__(self) -> str:
        return f"Result({self._values!r})"

    def render(self) -> str:
        """Format the metrics one ``label: value`` pair per line."""
        if not self._values:
            return "no data\n"
        return "".join(f"{label}: {value}\n" for label, value in self._values.items())

    def print(self, file: Optional[TextIO] = None) -> None:
        stream = file if file is not None else sys.stdout
        stream.write(self.render())
