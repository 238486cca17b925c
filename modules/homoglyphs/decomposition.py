"""Выводит ASCII-эквиваленты символов из их канонического разложения.
Например, "é" раскладывается на "e" и комбинируемый акцент, после отбрасывания не-ASCII остаётся "e"."""
import logging
import typing as t

from api import CodepointStore
from modules.unicode_data import CodepointRecord
from .errors import DecompositionCycle


__all__ = ['DecompositionResolver', 'strip_non_ascii']
# так выглядят разложения вида "(1)" после отбрасывания цифр-не-ASCII; смысла в них нет
EMPTY_PLACEHOLDER = '()'


def strip_non_ascii(text: str) -> str:
    """Убирает из строки все символы за пределами ASCII."""
    return ''.join(ch for ch in text if ord(ch) < 128)


class DecompositionResolver:
    """Рекурсивно раскладывает символы и записывает полученные ASCII-эквиваленты в хранилище."""
    def __init__(self, store: CodepointStore[CodepointRecord], max_depth: int = 32,
                 log: t.Optional[logging.Logger] = None):
        self.store = store
        self.max_depth = max_depth
        self._log = log or logging.getLogger('homoglyphs.decompose')

    def expand(self, codepoint: int, decomposition: t.Sequence[int], depth: int = 0) -> str:
        """Раскрывает разложение до конца. Составляющие, у которых есть своё разложение, раскрываются рекурсивно;
        иначе используется их ASCII-эквивалент, если он известен, или сам символ.

        :param codepoint: Кодовая точка, ради которой идёт разложение (для сообщения об ошибке).
        :param decomposition: Разложение - последовательность кодовых точек.
        :param depth: Текущая глубина рекурсии."""
        if depth >= self.max_depth:
            raise DecompositionCycle(codepoint, self.max_depth)
        parts = []
        for part in decomposition:
            record = self.store.get(part)
            if record is not None and record.decomposition:
                parts.append(self.expand(codepoint, record.decomposition_codepoints(), depth + 1))
            elif record is not None and record.ascii is not None:
                parts.append(record.ascii)
            else:
                parts.append(chr(part))
        return ''.join(parts)

    def derive(self, record: CodepointRecord) -> t.Optional[str]:
        """Вычисляет ASCII-эквивалент записи, ничего не записывая. None, если эквивалента нет."""
        if not record.decomposition:
            return None
        result = strip_non_ascii(self.expand(record.codepoint, record.decomposition_codepoints()))
        if not result or result == EMPTY_PLACEHOLDER:
            return None
        return result

    def resolve(self, codepoint: int) -> t.Optional[str]:
        """Вычисляет ASCII-эквивалент кодовой точки и записывает его, если эквивалент ещё не задан.
        Повторный вызов вернёт то же значение, но ничего не запишет.
        Выбрасывает DecompositionCycle, если разложение слишком глубокое."""
        record = self.store.get(codepoint)
        if record is None:
            return None
        result = self.derive(record)
        if result is not None and self.store.set_ascii(codepoint, result):
            self._log.debug('U+%04X %s -> %s', codepoint, record.char, result)
        return result

    def resolve_all(self, records: t.Iterable[CodepointRecord]) -> int:
        """Выводит эквиваленты для всех записей, у которых есть разложение и ещё нет эквивалента.
        :returns: Число сделанных записей."""
        written = 0
        for record in records:
            if record.ascii is not None or not record.decomposition:
                continue
            try:
                result = self.derive(record)
            except DecompositionCycle as err:
                self._log.warning('%s, skipping', err)
                continue
            if result is not None and self.store.set_ascii(record.codepoint, result):
                written += 1
        self._log.info('Decomposition produced %d ascii equivalents', written)
        return written
