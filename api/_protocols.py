"""Описание основных протоколов взаимодействия компонентов системы."""
import typing as t

from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.ext.asyncio import AsyncAttrs


__all__ = [
    'ConfigManager', 'DBModel', 'CodepointStore',
]
_T = t.TypeVar('_T')
_R = t.TypeVar('_R', covariant=True)


class DBModel(AsyncAttrs, DeclarativeBase):
    """Основная модель SQLAlchemy для работы с базой данных."""
    pass


class ConfigManager(t.Protocol[_T]):
    """Менеджер конфигурации, обеспечивающий загрузку и сохранение конфигов."""
    async def load(self, name: str, dataclass: t.Type[_T]) -> _T:
        """Загружает конфиг с указанным именем, помещая значения в экземпляр указанного датакласса.
        :param name: Имя конфига (обычно совпадает с именем раздела).
        :param dataclass: Датакласс, в который следует обернуть содержимое конфига."""
        ...

    async def save(self, name: str, config: _T) -> None:
        """Сохраняет конфиг с указанным именем, забирая значения из экземпляра датакласса.
        :param name: Имя конфига (обычно совпадает с именем раздела).
        :param config: Объект, из которого следует взять содержимое конфига."""
        ...


class CodepointStore(t.Protocol[_R]):
    """Хранилище сведений о кодовых точках, через которое работают алгоритмы вывода ASCII-эквивалентов."""
    def get(self, codepoint: int) -> t.Optional[_R]:
        """Возвращает запись о кодовой точке, или None, если такой записи нет."""
        ...

    def set_ascii(self, codepoint: int, ascii_value: str) -> bool:
        """Записывает ASCII-эквивалент кодовой точки, но только если он ещё не задан.
        :returns: True, если запись действительно произошла."""
        ...
