# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import io
import logging

import pytest

import semrel_github.log as examinee


@pytest.fixture
def restore_root_logger():
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)
    for handler in handlers:
        logging.root.addHandler(handler)
    logging.root.setLevel(level)


def test_configure_default_logging(restore_root_logger):
    stream = io.StringIO()
    examinee.configure_default_logging(stdout_level=logging.DEBUG, stream=stream)

    logging.getLogger('semrel_github.test').debug('some message')
    logging.getLogger('github3').info('suppressed')

    output = stream.getvalue()
    assert '[DEBUG] semrel_github.test: some message' in output
    # not a tty - no colouring
    assert '\033[' not in output
    assert 'suppressed' not in output
    assert logging.getLogger('github3').level == logging.WARNING


def test_formatter_colours_level():
    formatter = examinee.ProviderFormatter(fmt='[%(levelprefix)s] %(message)s', colored=True)
    record = logging.LogRecord('name', logging.ERROR, __file__, 1, 'msg', None, None)

    formatted = formatter.format(record)
    assert examinee.Bcolors.RED in formatted
    assert formatted.endswith('msg')
    # record passed to other handlers must remain unchanged
    assert record.levelname == 'ERROR'


def test_configure_default_logging_replaces_all_handlers(restore_root_logger):
    for _ in range(3):
        logging.root.addHandler(logging.NullHandler())

    stream = io.StringIO()
    examinee.configure_default_logging(stream=stream)

    assert len(logging.root.handlers) == 1
    assert logging.root.handlers[0].stream is stream
