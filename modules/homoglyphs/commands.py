"""Команды обслуживания базы ASCII-эквивалентов. Каждая команда - корутина, получающая контекст и аргументы,
и возвращающая код завершения."""
import dataclasses
import logging
from pathlib import Path
import sys
import typing as t

from api import utf8_escape
from modules.unicode_data import CodepointRepository
from .charmap import write_charmap, read_charmap
from .config import HomoglyphsConfig
from .confusables import ConfusableMerger, iter_clusters
from .coverage import scan
from .decomposition import DecompositionResolver
from .patterns import generate_rules, format_rule
from .sources import fetch_confusables, parse_confusables_summary


__all__ = ['CommandContext', 'COMMANDS']


@dataclasses.dataclass
class CommandContext:
    """Всё, что нужно командам для работы."""
    cfg: HomoglyphsConfig
    repo: CodepointRepository
    data_dir: Path
    log: logging.Logger
    out: t.TextIO = sys.stdout

    def path(self, name: str) -> Path:
        """Относительные пути из конфига отсчитываются от каталога данных."""
        path = Path(name)
        return path if path.is_absolute() else self.data_dir / path

    def print(self, *args) -> None:
        print(*args, file=self.out)


Command = t.Callable[[CommandContext, list[str]], t.Awaitable[int]]
COMMANDS: dict[str, Command] = {}


def command(name: str) -> t.Callable[[Command], Command]:
    """Регистрирует корутину как команду с указанным именем."""
    def wrapper(func: Command) -> Command:
        COMMANDS[name] = func
        return func
    return wrapper


@command('create_schema')
async def create_schema(ctx: CommandContext, args: list[str]) -> int:
    """Создать таблицы БД"""
    await ctx.repo.create_tables()
    ctx.log.info('Tables created')
    return 0


@command('decompose')
async def decompose(ctx: CommandContext, args: list[str]) -> int:
    """Вывести ASCII-эквиваленты из разложения символов"""
    store = await ctx.repo.load_store()
    resolver = DecompositionResolver(store, ctx.cfg.max_decomposition_depth, ctx.log.getChild('decompose'))
    resolver.resolve_all(store)
    await ctx.repo.store_ascii(store.changes)
    return 0


@command('import_confusables')
async def import_confusables(ctx: CommandContext, args: list[str]) -> int:
    """Импортировать схожие символы с unicode.org"""
    source = await fetch_confusables(ctx.cfg.confusables_url, ctx.path(ctx.cfg.confusables_cache), ctx.log)
    store = await ctx.repo.load_store()
    merger = ConfusableMerger(store, ctx.cfg.sentinel, ctx.log.getChild('confusables'))
    with source.open('rt', encoding='utf-8-sig') as f:
        merger.merge(iter_clusters(parse_confusables_summary(f, ctx.log)))
    await ctx.repo.store_ascii(store.changes)
    if merger.conflicts:
        ctx.log.warning('%d clusters are marked with %r and need manual review',
                        len(merger.conflicts), ctx.cfg.sentinel)
    return 0


@command('find_missing')
async def find_missing(ctx: CommandContext, args: list[str]) -> int:
    """Найти пропуски и наложения в покрытии кодовых точек"""
    codepoints = [cp async for cp in ctx.repo.stream_codepoints()]
    ranges = await ctx.repo.get_special_ranges()
    count = 0
    for issue in scan(codepoints, ranges, end=ctx.cfg.last_codepoint):
        ctx.print(str(issue))
        count += 1
    ctx.log.info('Found %d coverage issues', count)
    return 1 if count else 0


@command('generate_map')
async def generate_map(ctx: CommandContext, args: list[str]) -> int:
    """Сформировать карту символов"""
    path = ctx.path(args[0] if args else ctx.cfg.charmap_file)
    entries = [(r.codepoint, r.ascii) async for r in ctx.repo.stream_records(resolved_only=True)]
    count = write_charmap(path, entries)
    ctx.log.info('Updated %s with %d entries', path, count)
    return 0


@command('test_map')
async def test_map(ctx: CommandContext, args: list[str]) -> int:
    """Сверить карту символов с БД"""
    path = ctx.path(args[0] if args else ctx.cfg.charmap_file)
    charmap = read_charmap(path)
    mismatches = 0
    async for record in ctx.repo.stream_records(resolved_only=True):
        expected = record.ascii if record.ascii.strip() else ' '
        actual = charmap.pop(record.codepoint, None)
        if actual != expected:
            mismatches += 1
            ctx.print(f'U+{record.hcode}: expected {expected!r}, map has {actual!r}')
    for codepoint, actual in sorted(charmap.items()):
        mismatches += 1
        ctx.print(f'U+{codepoint:04X}: not resolved in database, map has {actual!r}')
    if mismatches:
        ctx.log.warning('Char map %s has %d mismatches', path, mismatches)
        return 1
    ctx.log.info('Char map %s matches the database', path)
    return 0


@command('replace_tags')
async def replace_tags(ctx: CommandContext, args: list[str]) -> int:
    """Сформировать правила замены для фильтра"""
    resolved = [(r.ascii, r.codepoint) async for r in ctx.repo.stream_records(resolved_only=True)]
    for letter, pattern in generate_rules(resolved, ctx.cfg.fallbacks):
        ctx.print(format_rule(ctx.cfg.rule_name, letter, pattern))
    return 0


@command('list_ascii')
async def list_ascii(ctx: CommandContext, args: list[str]) -> int:
    """Перечислить символы, у которых есть ASCII-эквивалент"""
    async for record in ctx.repo.stream_records(resolved_only=True):
        ctx.print(f'U+{record.hcode} {record.char} {record.ascii}')
    return 0


@command('list_homoglyphs')
async def list_homoglyphs(ctx: CommandContext, args: list[str]) -> int:
    """Перечислить символы, схожие с указанным, или все группы схожих символов"""
    if args:
        async for record in ctx.repo.stream_records(ascii_value=args[0]):
            ctx.print(f'U+{record.hcode:<5} {utf8_escape(record.char):<17} {record.description}')
        return 0
    groups: dict[str, list[str]] = {}
    async for record in ctx.repo.stream_records(resolved_only=True):
        groups.setdefault(record.ascii.upper(), []).append(record.char)
    for ascii_value, chars in sorted(groups.items()):
        ctx.print(f'{ascii_value:<6}: {" ".join(chars)}')
    return 0
