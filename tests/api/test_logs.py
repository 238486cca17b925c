import logging
import logging.handlers
import sys
import tempfile
import unittest
from pathlib import Path

import yaml

from api import ConfigManagerImpl, setup_logging


class TestSetupLogging(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name)
        self._handlers = logging.root.handlers[:]
        self._level = logging.root.level
        self._excepthook = sys.excepthook

    def tearDown(self):
        for handler in logging.root.handlers:
            if handler not in self._handlers:
                handler.close()
        logging.root.handlers[:] = self._handlers
        logging.root.setLevel(self._level)
        sys.excepthook = self._excepthook
        logging.getLogger('homoglyphs.test').setLevel(logging.NOTSET)
        self._tmp.cleanup()

    async def test_file_handler(self):
        cfgdir = self.path / 'config'
        cfgdir.mkdir()
        logfile = self.path / 'homoglyphs.log'
        with (cfgdir / 'logging.yaml').open('wt', encoding='utf-8') as f:
            yaml.dump({'file': str(logfile), 'levels': {'homoglyphs.test': 'WARNING'}}, f)
        logcfg = await setup_logging(ConfigManagerImpl(cfgdir))
        self.assertEqual(logcfg.file, str(logfile))
        kinds = [type(h) for h in logging.root.handlers]
        self.assertIn(logging.handlers.RotatingFileHandler, kinds)
        self.assertEqual(logging.getLogger('homoglyphs.test').level, logging.WARNING)

    async def test_defaults(self):
        cfgdir = self.path / 'config'
        logcfg = await setup_logging(ConfigManagerImpl(cfgdir), verbose=True)
        self.assertIsNone(logcfg.file)
        self.assertTrue((cfgdir / 'logging.yaml').is_file())
        self.assertEqual(len(logging.root.handlers), 1)
        self.assertEqual(logging.root.handlers[0].level, logging.DEBUG)


if __name__ == '__main__':
    unittest.main()
