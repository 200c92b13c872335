"""Exact-match path exclusion."""

from typing import FrozenSet, Iterable, Tuple


def parse_path_list(text: str) -> Tuple[str, ...]:
    """Split a comma-separated path list, dropping empty entries."""
    if not text:
        return ()
    return tuple(path for path in text.split(',') if path)


class PathExclusionFilter:
    """
    Decides whether an absolute node path is one of the excluded paths.

    Matching is exact string equality: excluding "/r3/a" does not exclude
    "/r3/a/b" by itself, nor "/r3/ab".
    """

    def __init__(self, paths: Iterable[str] = ()):
        self.paths: FrozenSet[str] = frozenset(paths)

    @classmethod
    def from_csv(cls, text: str) -> "PathExclusionFilter":
        """Build a filter from a comma-separated list; empty text excludes nothing."""
        return cls(parse_path_list(text))

    def is_excluded(self, path: str) -> bool:
        return path in self.paths

    def __len__(self) -> int:
        return len(self.paths)
