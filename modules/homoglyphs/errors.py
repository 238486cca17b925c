"""Provides classes for errors raised while deriving ASCII equivalents and building rules."""
import typing as t


__all__ = [
    'HomoglyphError', 'DecompositionCycle', 'AmbiguousConfusableCluster',
    'MalformedRangeInput', 'MalformedMapEntry', 'SourceDownloadError',
]


class HomoglyphError(RuntimeError):
    """Base class for all errors of this package."""


class DecompositionCycle(HomoglyphError):
    """Decomposition of a code point went deeper than allowed. Usually means the data contains a cycle."""
    __slots__ = ('codepoint', 'depth')

    def __init__(self, codepoint: int, depth: int):
        super().__init__(codepoint, depth)
        self.codepoint = codepoint
        self.depth = depth

    def __str__(self):
        return f'Decomposition of U+{self.codepoint:04X} exceeds depth limit of {self.depth}'


class AmbiguousConfusableCluster(HomoglyphError):
    """Cluster of confusables contains more than one ASCII character. Never raised, only reported."""
    __slots__ = ('members', 'candidates')

    def __init__(self, members: t.Sequence[str], candidates: t.Sequence[str]):
        super().__init__(members, candidates)
        self.members = tuple(members)
        self.candidates = tuple(candidates)

    def __str__(self):
        return (f'Multiple ASCII equivalents ({" ".join(self.candidates)}) '
                f'for {" ".join(self.members)}')


class MalformedRangeInput(HomoglyphError):
    """Code points or special ranges passed to the coverage scanner are not properly ordered or formed."""


class MalformedMapEntry(HomoglyphError, ValueError):
    """Line of a character map could not be parsed."""


class SourceDownloadError(HomoglyphError):
    """Source data file could not be downloaded."""
    __slots__ = ('url', 'status')

    def __init__(self, url: str, status: int, reason: t.Optional[str] = None):
        super().__init__(url, status, reason)
        self.url = url
        self.status = status
        self.reason = reason

    def __str__(self):
        return f'[{self.status}] {self.reason or "Download failed"}\nUrl: {self.url}'
