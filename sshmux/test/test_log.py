#! /usr/bin/env python3
from sshmux.log import ColorFormatter, RESET, setup_logging

from io import StringIO
import logging
import re
import unittest


class TestLogging(unittest.TestCase):

    def setUp(self):
        self.addCleanup(setup_logging, False)

    def test_quiet(self):
        """
        Without verbose only warnings and errors are shown.
        """
        stream = StringIO()
        logger = setup_logging(False, stream)
        logger.info('Found 3 hosts')
        logger.warning('Session "demo" already exists')
        logger.error('No valid hosts found')
        self.assertEqual(stream.getvalue(),
                'Warning: Session "demo" already exists\n'
                'Error: No valid hosts found\n')

    def test_verbose(self):
        """
        Progress messages carry a timestamp.
        """
        stream = StringIO()
        logger = setup_logging(True, stream)
        logger.info('Found %d hosts', 3)
        self.assertTrue(re.match(r'^\[\d\d:\d\d:\d\d\] Found 3 hosts\n$',
            stream.getvalue()), stream.getvalue())

    def test_single_handler(self):
        stream = StringIO()
        setup_logging(True, StringIO())
        logger = setup_logging(True, stream)
        self.assertEqual(len(logger.handlers), 1)

    def test_color(self):
        record = logging.LogRecord('sshmux', logging.ERROR, __file__, 1,
                'tmux is required but not installed', None, None)
        line = ColorFormatter(color=True).format(record)
        self.assertTrue(line.startswith('\033[0;31mError: tmux'))
        self.assertTrue(line.endswith(RESET))

        line = ColorFormatter(color=False).format(record)
        self.assertEqual(line, 'Error: tmux is required but not installed')



if __name__ == '__main__':
    unittest.main()
