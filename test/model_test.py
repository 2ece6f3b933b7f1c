# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import dacite
import pytest

import semrel_github.model as sm

from _test_utils import (
    TIMESTAMP,
    commit_dict,
)


def test_raw_commit_from_dict():
    raw_commit = sm.raw_commit_from_dict(commit_dict('abcd', 'feat: foo'))

    assert raw_commit.sha == 'abcd'
    assert raw_commit.raw_message == 'feat: foo'
    assert raw_commit.annotations['author_login'] == 'author-login'
    assert raw_commit.annotations['committer_date'] == TIMESTAMP


def test_raw_commit_from_dict_without_github_users():
    # e.g. if commit-email is not associated to any github-account
    commit = commit_dict('abcd', 'fix: bar')
    commit['author'] = None
    commit['committer'] = None
    del commit['commit']['committer']

    raw_commit = sm.raw_commit_from_dict(commit)

    assert raw_commit.annotations['author_login'] == ''
    assert raw_commit.annotations['committer_login'] == ''
    assert raw_commit.annotations['author_name'] == 'author'
    assert raw_commit.annotations['committer_name'] == ''
    assert raw_commit.annotations['committer_date'] == ''


def test_create_release_config_from_dict():
    cfg = sm.CreateReleaseConfig.from_dict({
        'new_version': '1.2.3',
        'sha': 'abcd',
        'branch': 'main',
        'changelog': '* feat: foo',
        'prerelease': True,
    })

    assert cfg == sm.CreateReleaseConfig(
        new_version='1.2.3',
        sha='abcd',
        branch='main',
        changelog='* feat: foo',
        prerelease=True,
    )
    assert sm.as_dict(cfg)['new_version'] == '1.2.3'

    with pytest.raises(dacite.DaciteError):
        sm.CreateReleaseConfig.from_dict({'new_version': '1.2.3'})

    with pytest.raises(dacite.DaciteError):
        sm.CreateReleaseConfig.from_dict({'new_version': '1.2.3', 'sha': 'abcd', 'unknown': 1})
