"""Предоставляет доступ к базе данных через посредничество асинхронного варианта SQLAlchemy."""
import contextlib
import typing as t
import os
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


__all__ = ['get_dsn', 'database_engine']


def get_dsn() -> str:
    """Определяет строку подключения к базе данных по переменным окружения.
    HOMOGLYPHS_DB_DSN имеет приоритет, иначе строка собирается из переменных POSTGRES_*."""
    dsn = os.environ.get('HOMOGLYPHS_DB_DSN')
    if dsn:
        return dsn
    host = os.environ['POSTGRES_HOST']
    user = os.environ['POSTGRES_USER']
    pwd = os.environ['POSTGRES_PWD']
    dbname = os.environ.get('POSTGRES_DB', 'unicode_db')
    return f'postgresql+asyncpg://{user}:{pwd}@{host}/{dbname}'


@contextlib.asynccontextmanager
async def database_engine(dsn: t.Optional[str] = None) -> t.AsyncIterator[AsyncEngine]:
    """Создаёт движок базы данных на время работы контекста, и освобождает его по выходу."""
    log = logging.getLogger('homoglyphs.db')
    dsn = dsn or get_dsn()
    log.debug('Connecting to database...')
    engine = create_async_engine(dsn)
    log.debug('Connected successfuly to %s', engine.url.render_as_string(hide_password=True))
    try:
        yield engine
    finally:
        await engine.dispose()
        log.debug('Disconnected from database.')
