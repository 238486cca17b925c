"""Загрузка и разбор исходных данных о схожих символах (confusablesSummary.txt с unicode.org)."""
import logging
from pathlib import Path
import re
import typing as t

import aiohttp

from modules.unicode_data import codepoints_to_str
from .confusables import ConfusableRow
from .errors import SourceDownloadError


__all__ = ['parse_confusables_summary', 'fetch_confusables']
HEX_CODE_RE = re.compile(r'^[0-9A-Fa-f]{4,6}$')


def _decode_sequence(field: str) -> t.Optional[str]:
    """Превращает коды через пробел в строку. None, если в поле есть что-то кроме кодов."""
    codes = field.split()
    if not codes or not all(HEX_CODE_RE.match(code) for code in codes):
        return None
    return codepoints_to_str(field)


def parse_confusables_summary(lines: t.Iterable[str],
                              log: t.Optional[logging.Logger] = None) -> t.Iterator[ConfusableRow]:
    """Разбирает строки файла confusablesSummary.txt.
    Строки-комментарии и пустые строки пропускаются. Поля разделены табуляцией: поле 0 - маркер
    (пустой у первого члена кластера), поле 2 - коды символов через пробел."""
    log = log or logging.getLogger('homoglyphs.sources')
    for lineno, line in enumerate(lines, 1):
        line = line.rstrip('\r\n')
        # комментарии занимают строку целиком; "#" внутри строки данных - это сам символ
        if not line.strip() or line.lstrip().startswith('#'):
            continue
        fields = line.split('\t')
        if len(fields) < 3:
            continue
        text = _decode_sequence(fields[2])
        if text is None:
            log.debug('Skipped line %d: %r', lineno, line)
            continue
        yield ConfusableRow(marker=fields[0], text=text)


async def fetch_confusables(url: str, cache_file: Path, log: t.Optional[logging.Logger] = None) -> Path:
    """Скачивает файл с данными, если его ещё нет в кэше.
    Выбрасывает SourceDownloadError, если сервер ответил ошибкой или соединение не удалось.
    :returns: Путь к локальной копии файла."""
    log = log or logging.getLogger('homoglyphs.sources')
    if cache_file.is_file():
        log.debug('Using cached %s', cache_file)
        return cache_file
    log.info('Downloading %s', url)
    cache_file.parent.mkdir(parents=True, exist_ok=True)
    partial = cache_file.with_name(cache_file.name + '.part')
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url) as r:
                if not 200 <= r.status < 300:
                    raise SourceDownloadError(url, r.status, r.reason)
                with partial.open('wb') as f:
                    async for chunk in r.content.iter_chunked(64*1024):
                        f.write(chunk)
    except aiohttp.ClientError as err:
        partial.unlink(missing_ok=True)
        raise SourceDownloadError(url, 0, f'Connection failed: {err!s}') from err
    except BaseException:
        partial.unlink(missing_ok=True)
        raise
    partial.replace(cache_file)
    log.info('Saved %s', cache_file)
    return cache_file
