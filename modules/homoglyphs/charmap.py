"""Карта символов: файл, связывающий кодовые точки с их ASCII-эквивалентами.
Каждая строка имеет вид "<код> <байты эквивалента через +>", например "0430 61" для кириллической "а"."""
from pathlib import Path
import re
import typing as t

from .errors import MalformedMapEntry


__all__ = ['encode_entry', 'decode_entry', 'write_charmap', 'read_charmap']
ENTRY_RE = re.compile(r'^([0-9A-Fa-f]{4,6}) ([0-9A-Fa-f]{2}(?:\+[0-9A-Fa-f]{2})*)$')


def encode_entry(codepoint: int, ascii_value: str) -> str:
    """Кодирует одну запись карты. Пробельные эквиваленты записываются одним пробелом."""
    if not ascii_value.strip():
        ascii_value = ' '
    elif not ascii_value.isascii():
        raise MalformedMapEntry(f'Equivalent of U+{codepoint:04X} is not ASCII: {ascii_value!r}')
    return f'{codepoint:04X} ' + '+'.join(f'{ord(ch):02X}' for ch in ascii_value)


def decode_entry(line: str) -> tuple[int, str]:
    """Разбирает одну запись карты. Выбрасывает MalformedMapEntry, если строка не соответствует формату."""
    match = ENTRY_RE.match(line.strip())
    if match is None:
        raise MalformedMapEntry(f'Malformed char map entry: {line!r}')
    hcode, hbytes = match.groups()
    return int(hcode, 16), ''.join(chr(int(item, 16)) for item in hbytes.split('+'))


def write_charmap(path: Path, entries: t.Iterable[tuple[int, str]]) -> int:
    """Записывает карту символов в файл в порядке возрастания кодовых точек.
    :returns: Число записанных строк."""
    count = 0
    with path.open('wt', encoding='ascii', newline='\n') as f:
        for codepoint, ascii_value in sorted(entries):
            f.write(encode_entry(codepoint, ascii_value) + '\n')
            count += 1
    return count


def read_charmap(path: Path) -> dict[int, str]:
    """Читает карту символов из файла. Пустые строки пропускаются."""
    result: dict[int, str] = {}
    with path.open('rt', encoding='ascii') as f:
        for line in f:
            if not line.strip():
                continue
            codepoint, ascii_value = decode_entry(line)
            result[codepoint] = ascii_value
    return result
