"""Инструменты для вывода ASCII-эквивалентов символов Unicode и построения правил для фильтров,
распознающих подмену букв схожими символами (кириллическая "а" вместо латинской "a" и т.п.)."""


async def main(argv=None) -> int:
    """Тело программы. Разбирает командную строку, настраивает журнал и выполняет команду.
    :returns: Код завершения команды."""

    import argparse
    import logging
    import os
    import sys
    from pathlib import Path

    from dotenv import load_dotenv

    from api import ConfigManagerImpl, setup_logging
    from modules.db import database_engine
    from modules.unicode_data import CodepointRepository
    from modules.homoglyphs import HomoglyphsConfig
    from modules.homoglyphs.commands import COMMANDS, CommandContext

    parser = argparse.ArgumentParser(
        description='Derive ASCII equivalents of Unicode characters and build homoglyph matching rules.',
        epilog='Commands: ' + '; '.join(f'{name} - {func.__doc__}' for name, func in COMMANDS.items()),
    )
    parser.add_argument('command', choices=sorted(COMMANDS), help='Command to run')
    parser.add_argument('args', nargs='*', help='Command arguments')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug messages')
    options = parser.parse_args(argv)

    load_dotenv()
    data = Path(os.environ.get('HOMOGLYPHS_DATA', str(Path(sys.argv[0]).parent / 'data')))
    cfg = ConfigManagerImpl(data / 'config')
    await setup_logging(cfg, options.verbose)
    log = logging.getLogger('homoglyphs')
    hcfg = await cfg.load('homoglyphs', HomoglyphsConfig)

    async with database_engine() as engine:
        ctx = CommandContext(
            cfg=hcfg,
            repo=CodepointRepository(engine, log.getChild('repository')),
            data_dir=data,
            log=log,
        )
        log.debug('Running %s %s', options.command, ' '.join(options.args))
        return await COMMANDS[options.command](ctx, options.args)


if __name__ == '__main__':
    import asyncio
    import sys
    sys.exit(asyncio.run(main()))
