import os
import json
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional
from pathlib import Path


@dataclass(frozen=True)
class SlideFile:
    """An uploaded deck: display name plus raw bytes.

    Decks named on the command line carry a path instead and are read on
    demand, so a missing or unreadable file fails inside the batch rather
    than before it.
    """

    name: str
    data: Optional[bytes] = None
    path: Optional[str] = None

    def read(self) -> bytes:
        if self.data is not None:
            return self.data
        if self.path is None:
            raise ValueError(f"Slide file {self.name} has neither data nor a path")
        return Path(self.path).read_bytes()

    @property
    def size(self) -> int:
        return len(self.read())

    @classmethod
    def from_path(cls, path: str) -> "SlideFile":
        return cls(name=Path(path).name, path=str(path))


# Decks from disk, in the order given
def load_files(paths: Iterable[str]) -> List[SlideFile]:
    return [SlideFile.from_path(p) for p in paths]


# Write text (CSV export etc.)
def write_text(path: str, text: str) -> str:

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)

    return path


# Results JSON
def write_json(path: str, data: Any):

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)
