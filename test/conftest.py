# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import types

from unittest.mock import MagicMock

import pytest

import semrel_github.github_provider

from _test_utils import (
    API_URL,
    COMMITS,
    OWNER,
    REPO,
    TAG_REFS,
    TEST_SHA,
)


def _list_commits(sha=None, per_page=None, **kwargs):
    skip = 0
    for idx, commit in enumerate(COMMITS):
        if commit['sha'] == sha:
            skip = idx
            break

    for commit in COMMITS[skip:]:
        yield MagicMock(as_dict=MagicMock(return_value=commit))


def _annotated_tag(sha):
    if sha != '12345678':
        return None
    return types.SimpleNamespace(object=types.SimpleNamespace(sha=TEST_SHA, type='commit'))


@pytest.fixture
def repository():
    repository = MagicMock()
    repository.owner.login = OWNER
    repository.name = REPO
    repository.default_branch = 'master'
    repository.private = True

    repository.commits.side_effect = _list_commits
    repository.refs.side_effect = lambda subspace='', **kwargs: iter(TAG_REFS)
    repository.tag.side_effect = _annotated_tag

    return repository


@pytest.fixture
def github_api(repository):
    github_api = MagicMock()
    github_api.session.base_url = API_URL
    github_api.repository.return_value = repository
    return github_api


@pytest.fixture
def provider(github_api):
    def _provider(**config):
        provider = semrel_github.github_provider.GitHubRepository(github_api=github_api)
        provider.init(
            config={
                'slug': f'{OWNER}/{REPO}',
                'token': 'token',
            } | config,
            env={},
        )
        return provider
    return _provider
