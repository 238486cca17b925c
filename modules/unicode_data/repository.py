"""Класс-репозиторий, занимающийся доступом к таблицам сведений о кодовых точках."""
import typing as t
import logging

from sqlalchemy import select, update, bindparam
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, AsyncSession

from api import aiobatch
from .models import UnicodeBase, UnicodeChar, SpecialCodepoints, CodepointRecord, SpecialRange
from .store import MemoryCodepointStore


__all__ = ['CodepointRepository']


class CodepointRepository:
    """Предоставляет услуги по чтению сведений о кодовых точках и записи их ASCII-эквивалентов."""
    BATCH_SIZE = 5000

    def __init__(self, engine: AsyncEngine, log: logging.Logger):
        self.__sessionmaker = async_sessionmaker(bind=engine, class_=AsyncSession,
                                                 autoflush=True, expire_on_commit=False)
        self.__log = log

    async def create_tables(self) -> None:
        """Создаёт таблицы, необходимые для работы репозитория."""
        engine: AsyncEngine = self.__sessionmaker.kw['bind']
        async with engine.connect() as conn:
            await conn.run_sync(UnicodeBase.metadata.create_all)
            await conn.commit()

    async def stream_records(self, ascii_value: t.Optional[str] = None,
                             resolved_only: bool = False) -> t.AsyncIterable[CodepointRecord]:
        """Перебирает записи о кодовых точках в порядке возрастания.

        :param ascii_value: Выбирать только символы с указанным ASCII-эквивалентом.
        :param resolved_only: Выбирать только символы, у которых есть ASCII-эквивалент."""
        async with self.__sessionmaker() as session:
            stmt = select(UnicodeChar).order_by(UnicodeChar.codepoint.asc())
            if ascii_value is not None:
                stmt = stmt.where(UnicodeChar.ascii == ascii_value)
            elif resolved_only:
                stmt = stmt.where(UnicodeChar.ascii.isnot(None))
            async for row in await session.stream_scalars(stmt):
                row: UnicodeChar
                yield row.to_record()

    async def load_store(self) -> MemoryCodepointStore:
        """Загружает все записи о кодовых точках в хранилище в памяти."""
        store = MemoryCodepointStore()
        async for batch in aiobatch(self.stream_records(), self.BATCH_SIZE):
            store.update(batch)
            self.__log.debug('Loaded %d records so far', len(store))
        self.__log.info('Loaded %d code points', len(store))
        return store

    async def stream_codepoints(self) -> t.AsyncIterable[int]:
        """Перебирает все известные кодовые точки в порядке возрастания."""
        async with self.__sessionmaker() as session:
            stmt = select(UnicodeChar.codepoint).order_by(UnicodeChar.codepoint.asc())
            async for codepoint in await session.stream_scalars(stmt):
                yield codepoint

    async def get_special_ranges(self) -> list[SpecialRange]:
        """Возвращает особые диапазоны в порядке возрастания начала диапазона."""
        async with self.__sessionmaker() as session:
            stmt = select(SpecialCodepoints).order_by(SpecialCodepoints.first_codepoint.asc())
            rows = await session.scalars(stmt)
            return [row.to_range() for row in rows]

    async def store_ascii(self, changes: t.Mapping[int, str]) -> int:
        """Сохраняет ASCII-эквиваленты символов. Уже заданные эквиваленты не перезаписываются.
        :returns: Число переданных на запись значений."""
        data = [dict(b_codepoint=codepoint, b_ascii=value) for codepoint, value in sorted(changes.items())]
        if not data:
            return 0
        table = UnicodeChar.__table__
        stmt = (
            update(table)
            .where(table.c.codepoint == bindparam('b_codepoint'), table.c.ascii.is_(None))
            .values(ascii=bindparam('b_ascii'))
        )
        engine: AsyncEngine = self.__sessionmaker.kw['bind']
        async with engine.begin() as conn:  # пакетное обновление через Core, один executemany на пакет
            for start in range(0, len(data), self.BATCH_SIZE):
                await conn.execute(stmt, data[start:start+self.BATCH_SIZE])
        self.__log.info('Stored %d ascii equivalents', len(data))
        return len(data)
