"""Проверяет, что известные кодовые точки вместе с особыми диапазонами покрывают пространство Unicode
без пропусков и наложений."""
import dataclasses
from enum import StrEnum
import typing as t

from modules.unicode_data import SpecialRange
from .errors import MalformedRangeInput


__all__ = ['IssueKind', 'CoverageIssue', 'scan']


class IssueKind(StrEnum):
    """Вид нарушения покрытия."""
    GAP = 'Missing'
    OVERLAP = 'Overlap'


@dataclasses.dataclass(frozen=True)
class CoverageIssue:
    """Пропуск или наложение в покрытии кодовых точек, границы включительно."""
    kind: IssueKind
    first: int
    last: int
    count: int

    def __str__(self):
        return f'{self.kind}: U+{self.first:04X} - U+{self.last:04X} ({self.count})'


def _checked_codepoints(assigned: t.Iterable[int]) -> t.Iterator[int]:
    prev = -1
    for codepoint in assigned:
        if codepoint <= prev:
            raise MalformedRangeInput(f'Code points are not strictly ascending: {prev:#x} followed by {codepoint:#x}')
        prev = codepoint
        yield codepoint


def _checked_ranges(ranges: t.Iterable[SpecialRange]) -> t.Iterator[SpecialRange]:
    prev = -1
    for item in ranges:
        if item.first < 0 or item.first > item.last:
            raise MalformedRangeInput(f'Invalid special range {item.first:#x}..{item.last:#x}')
        if item.first < prev:
            raise MalformedRangeInput(f'Special ranges are not ordered: {prev:#x} followed by {item.first:#x}')
        prev = item.first
        yield item


def scan(assigned: t.Iterable[int], special_ranges: t.Iterable[SpecialRange],
         end: t.Optional[int] = None) -> t.Iterator[CoverageIssue]:
    """Сливает упорядоченные последовательности кодовых точек и особых диапазонов, сообщая о пропусках и наложениях.
    Выбрасывает MalformedRangeInput, если входные данные не упорядочены.

    :param assigned: Кодовые точки, у которых есть записи, строго по возрастанию.
    :param special_ranges: Особые диапазоны по возрастанию начала.
    :param end: Если задано, то пропуск между последней покрытой точкой и end тоже считается нарушением."""
    codepoints = _checked_codepoints(assigned)
    ranges = _checked_ranges(special_ranges)
    last = -1
    c = next(codepoints, None)
    s = next(ranges, None)
    while c is not None or s is not None:
        take_codepoint = s is None or (c is not None and c < s.first)
        d = c if take_codepoint else s.first
        if d > last + 1:
            yield CoverageIssue(IssueKind.GAP, last + 1, d - 1, d - last - 1)
        elif d < last + 1:
            yield CoverageIssue(IssueKind.OVERLAP, d, last, last - d + 1)
        if take_codepoint:
            last = d
            c = next(codepoints, None)
        else:
            last = s.last
            s = next(ranges, None)
    if end is not None and last < end:
        yield CoverageIssue(IssueKind.GAP, last + 1, end, end - last)
