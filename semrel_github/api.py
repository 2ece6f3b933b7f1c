# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import enum
import logging

import github3
import github3.github
import github3.session

import semrel_github.http_requests

logger = logging.getLogger(__name__)

GITHUB_COM = 'github.com'


class SessionAdapter(enum.Enum):
    NONE = None
    RETRY = 'retry'


def github_api(
    token: str,
    enterprise_host: str | None=None,
    verify_ssl: bool=True,
    session_adapter: SessionAdapter=SessionAdapter.RETRY,
) -> github3.github.GitHub | github3.github.GitHubEnterprise:
    '''
    returns an initialised github-api instance, authenticated using the given token.

    If `enterprise_host` is passed (and does not refer to github.com), an api-instance for
    GitHub-Enterprise is returned, using `https://<enterprise_host>/api/v3` as api-url.
    '''
    session = github3.session.GitHubSession()
    session_adapter = SessionAdapter(session_adapter)

    if session_adapter is SessionAdapter.RETRY:
        session = semrel_github.http_requests.mount_default_adapter(
            session=session,
            max_pool_size=16, # increase with care, might cause github api "secondary-rate-limit"
        )

    if enterprise_host:
        enterprise_host = enterprise_host.removeprefix('https://').strip('/')

    if not enterprise_host or enterprise_host.lower() == GITHUB_COM:
        return github3.github.GitHub(
            token=token,
            session=session,
        )

    logger.debug(f'using GitHub-Enterprise at {enterprise_host=}')
    return github3.github.GitHubEnterprise(
        url=f'https://{enterprise_host}',
        token=token,
        verify=verify_ssl,
        session=session,
    )


def api_url(github_api: github3.github.GitHub) -> str:
    return github_api.session.base_url
