# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import dataclasses

import dacite


@dataclasses.dataclass(frozen=True)
class RepositoryInfo:
    owner: str
    repo: str
    default_branch: str
    private: bool = False


@dataclasses.dataclass(frozen=True)
class RawCommit:
    sha: str
    raw_message: str
    annotations: dict[str, str] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class Release:
    sha: str
    version: str


@dataclasses.dataclass(frozen=True)
class CreateReleaseConfig:
    new_version: str
    sha: str
    branch: str = ''
    changelog: str = ''
    prerelease: bool = False

    @staticmethod
    def from_dict(raw: dict) -> 'CreateReleaseConfig':
        return dacite.from_dict(
            data_class=CreateReleaseConfig,
            data=raw,
            config=dacite.Config(strict=True),
        )


def as_dict(obj) -> dict:
    return dataclasses.asdict(obj)


def _login(user: dict | None) -> str:
    if not user:
        return ''
    return user.get('login') or ''


def _git_actor(commit: dict, role: str) -> dict:
    return commit.get(role) or {}


def raw_commit_from_dict(commit: dict) -> RawCommit:
    '''
    translates a commit as returned by github's REST-API into a `RawCommit`.

    both the commit-listing (`GET /repos/{owner}/{repo}/commits`) and the comparison
    (`GET /repos/{owner}/{repo}/compare/{base}...{head}`, attribute `commits`) return commits
    in this shape. `author` and `committer` on top-level refer to github-users (which may be
    absent, e.g. if the commit's email-address is not associated to any account), whereas
    the ones nested below `commit` refer to the git-metadata.
    '''
    git_commit = commit.get('commit') or {}
    git_author = _git_actor(git_commit, 'author')
    git_committer = _git_actor(git_commit, 'committer')

    return RawCommit(
        sha=commit['sha'],
        raw_message=git_commit.get('message') or '',
        annotations={
            'author_login': _login(commit.get('author')),
            'author_name': git_author.get('name') or '',
            'author_email': git_author.get('email') or '',
            'author_date': git_author.get('date') or '',
            'committer_login': _login(commit.get('committer')),
            'committer_name': git_committer.get('name') or '',
            'committer_email': git_committer.get('email') or '',
            'committer_date': git_committer.get('date') or '',
        },
    )
