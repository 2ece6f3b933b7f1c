# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

from unittest import mock
from unittest.mock import MagicMock

import github3.exceptions
import pytest

import semrel_github.retry as examinee

from _test_utils import fake_response


def forbidden(message: str):
    return github3.exceptions.ForbiddenError(
        fake_response(status_code=403, json={'message': message}),
    )


@mock.patch('time.sleep')
def test_retries_if_quota_exceeded(sleep):
    function = MagicMock(side_effect=[
        forbidden('API rate limit exceeded for user'),
        forbidden('API rate limit exceeded for user'),
        'result',
    ])

    assert examinee.retry_and_throttle(function)('arg', kw='kw') == 'result'
    assert function.call_count == 3
    function.assert_called_with('arg', kw='kw')
    assert sleep.call_count == 2


@mock.patch('time.sleep')
def test_gives_up_after_retries(sleep):
    function = MagicMock(side_effect=forbidden('API rate limit exceeded'))

    with pytest.raises(github3.exceptions.ForbiddenError):
        examinee.retry_and_throttle(retries=2, sleep_seconds=1)(function)()

    assert function.call_count == 3
    sleep.assert_called_with(1)


@mock.patch('time.sleep')
def test_does_not_retry_other_errors(sleep):
    function = MagicMock(side_effect=forbidden('Resource not accessible by integration'))

    with pytest.raises(github3.exceptions.ForbiddenError):
        examinee.retry_and_throttle(function)()

    function = MagicMock(side_effect=ValueError('not a github-error'))
    with pytest.raises(ValueError):
        examinee.retry_and_throttle(function)()

    sleep.assert_not_called()
