# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import types

from unittest.mock import MagicMock

API_URL = 'https://api.github.com'
OWNER = 'owner'
REPO = 'test-repo'
TEST_SHA = 'deadbeef'
TIMESTAMP = '2020-04-19T12:00:00Z'


def commit_dict(sha: str, message: str) -> dict:
    git_actor = {
        'name': 'author',
        'email': 'author@github.com',
        'date': TIMESTAMP,
    }
    return {
        'sha': sha,
        'commit': {
            'message': message,
            'author': git_actor,
            'committer': git_actor,
        },
        'author': {'login': 'author-login'},
        'committer': {'login': 'author-login'},
    }


# newest first (as returned by github)
COMMITS = [
    commit_dict('abcd', 'feat(app): new new feature'),
    commit_dict('1111', 'feat: to'),
    commit_dict('abcd', 'feat(app): new feature'),
    commit_dict('dcba', 'Fix: bug'),
    commit_dict('cdba', 'Initial commit'),
    commit_dict('efcd', 'chore: break\nBREAKING CHANGE: breaks everything'),
    commit_dict('2222', 'feat: from'),
    commit_dict('beef', 'fix: test'),
]


def git_ref(ref: str, sha: str=TEST_SHA, type: str='commit'):
    return types.SimpleNamespace(
        ref=ref,
        object=types.SimpleNamespace(sha=sha, type=type),
    )


TAG_REFS = [
    git_ref('refs/tags/test-tag'),
    git_ref('refs/tags/v1.0.0'),
    git_ref('refs/tags/v2.0.0'),
    git_ref('refs/tags/v2.1.0-beta'),
    git_ref('refs/tags/v3.0.0-beta.2'),
    git_ref('refs/tags/v3.0.0-beta.1'),
    git_ref('refs/tags/2020.04.19'),
    git_ref('refs/tags/v1.1.1', sha='12345678', type='tag'),
]


def fake_response(
    status_code: int=200,
    json=None,
    next_url: str=None,
):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.json.return_value = json if json is not None else {}
    resp.links = {'next': {'url': next_url}} if next_url else {}
    resp.headers = {}
    return resp


