"""Хранилище сведений о кодовых точках в памяти. Алгоритмы работают с ним синхронно,
а накопленные изменения затем сохраняются в БД репозиторием."""
import typing as t

from .models import CodepointRecord


__all__ = ['MemoryCodepointStore']


class MemoryCodepointStore:
    """Снимок таблицы кодовых точек. Запоминает все ASCII-эквиваленты, записанные после загрузки."""
    def __init__(self, records: t.Iterable[CodepointRecord] = ()):
        self._records: dict[int, CodepointRecord] = {}
        self._changes: dict[int, str] = {}
        self.update(records)

    def update(self, records: t.Iterable[CodepointRecord]) -> None:
        """Добавляет или заменяет записи в снимке. Изменения при этом не учитываются."""
        for record in records:
            self._records[record.codepoint] = record

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> t.Iterator[CodepointRecord]:
        """Перебирает записи в порядке возрастания кодовых точек."""
        for codepoint in sorted(self._records):
            yield self._records[codepoint]

    def get(self, codepoint: int) -> t.Optional[CodepointRecord]:
        return self._records.get(codepoint)

    def set_ascii(self, codepoint: int, ascii_value: str) -> bool:
        record = self._records.get(codepoint)
        if record is None:
            # символ может встретиться в источнике, но отсутствовать в БД - запись ему не заводим
            return False
        if record.ascii is not None:
            return False
        record.ascii = ascii_value
        self._changes[codepoint] = ascii_value
        return True

    @property
    def changes(self) -> dict[int, str]:
        """ASCII-эквиваленты, записанные с момента загрузки."""
        return dict(self._changes)
