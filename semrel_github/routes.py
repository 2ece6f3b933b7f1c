# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import collections.abc
import logging

import github3.exceptions

import semrel_github.api
import semrel_github.util

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class Routes:
    '''
    github-api-v3-routes missing from github3.py (or not exposed in a paginated manner)
    '''
    def __init__(self, github_api):
        self._base_url = semrel_github.api.api_url(github_api)

    def _url(self, *parts):
        return semrel_github.util.urljoin(self._base_url, *parts)

    def repository(self, owner: str, name: str):
        return self._url('repos', owner, name)

    def compare(self, owner: str, name: str, base: str, head: str):
        return semrel_github.util.urljoin(
            self.repository(owner=owner, name=name),
            'compare',
            f'{base}...{head}',
        )


def iter_pages(
    github_api,
    url: str,
    list_attr: str=None,
    per_page: int=DEFAULT_PAGE_SIZE,
) -> collections.abc.Generator[dict, None, None]:
    '''
    yields elements from all pages returned for the given (paginated) api-route, following
    `next`-links as returned in response's `Link`-header.

    If `list_attr` is passed, responses are expected to be objects, and elements are read from
    the attribute of the given name (e.g. `commits` for comparisons). Otherwise, responses are
    expected to be lists.

    Iteration is lazy, i.e. subsequent pages are only retrieved if consumers continue iterating.
    '''
    params = {'per_page': per_page}

    while url:
        resp = github_api._get(url, params=params)
        if not resp.ok:
            raise github3.exceptions.error_for(resp)

        parsed = resp.json()
        if list_attr:
            parsed = parsed.get(list_attr) or []

        yield from parsed

        # next-links already contain query-params
        url = resp.links.get('next', {}).get('url')
        params = None
        if url:
            logger.debug(f'retrieving next page: {url=}')
