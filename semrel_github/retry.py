# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import functools
import logging
import time

import github3.exceptions

logger = logging.getLogger(__name__)


def retry_and_throttle(function: callable=None, retries=5, sleep_seconds=60):
    '''
    decorator intended to be used for retrying/throttling functions issueing github-api-requests
    that will sporadically run into quota-issues. There is a sleep of `sleep_seconds` (default:
    1m) between retries. Any other errors than github3.exceptions.ForbiddenError (and
    ForbiddenErrors not hinting at an exceeded quota) are re-raised immediately. After configured
    amount of retries, last exception is re-raised.

    may be used either as `@retry_and_throttle`, or as `@retry_and_throttle(retries=...)`
    '''
    if function is None:
        return functools.partial(
            retry_and_throttle,
            retries=retries,
            sleep_seconds=sleep_seconds,
        )

    @functools.wraps(function)
    def call_with_retry(*args, **kwargs):
        remaining = retries
        while True:
            try:
                return function(*args, **kwargs)
            except github3.exceptions.ForbiddenError as fbe:
                if remaining <= 0:
                    raise

                if isinstance(fbe.message, bytes):
                    message = fbe.message.decode('utf-8')
                else:
                    message = fbe.message or ''
                if not 'exceeded' in message:
                    raise

                remaining -= 1

                logger.warning(f'error from github: {fbe.message=} {remaining=}')
                time.sleep(sleep_seconds)

    return call_with_retry
