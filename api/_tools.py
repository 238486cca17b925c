"""Различные мелкие полезные утилиты."""
import typing as t


__all__ = ['aiobatch', 'utf8_escape']
_T = t.TypeVar('_T')


async def aiobatch(src: t.AsyncIterable[_T], batch_size: int) -> t.AsyncIterable[list[_T]]:
    """Группирует содержимое асинхронного генератора `src` в пакеты по `batch_size` элементов."""
    batch_list = []
    async for item in src:
        batch_list.append(item)
        if len(batch_list) >= batch_size:
            yield batch_list
            batch_list = []
    if batch_list:
        yield batch_list


def utf8_escape(text: str) -> str:
    """Представляет строку как последовательность байт UTF-8 в виде \\xHH."""
    return ''.join(f'\\x{b:02X}' for b in text.encode('utf-8'))
