# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import collections.abc
import importlib.metadata
import logging
import re

import github3
import github3.exceptions
import github3.repos

import semrel_github.api
import semrel_github.config
import semrel_github.model as sm
import semrel_github.release
import semrel_github.retry
import semrel_github.routes
import semrel_github.version
from semrel_github.provider import (
    Provider,
    ProviderError,
)

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = 'semrel-provider-github'
TAG_REF_PREFIX = 'refs/tags/'

# git-object-types a tag-ref may point to, which are considered for releases
COMMIT_TYPE = 'commit'
TAG_TYPE = 'tag'


def provider_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return 'dev'


class GitHubRepository(Provider):
    def __init__(
        self,
        github_api: github3.GitHub=None,
        config_file: str=None,
    ):
        '''
        Args:
            github_api (GitHub): github api to use (created upon `init` if not passed)
            config_file (str):   optional YAML file to read defaults for plugin-cfg from
        '''
        self._github_api = github_api
        self._config_file = config_file
        self._cfg = None

    def init(
        self,
        config: collections.abc.Mapping[str, str],
        env: collections.abc.Mapping[str, str]=None,
    ):
        self._cfg = semrel_github.config.provider_config(
            config=config,
            env=env,
            config_file=self._config_file,
        )

        if not self._github_api:
            self._github_api = semrel_github.api.github_api(
                token=self._cfg.token,
                enterprise_host=self._cfg.enterprise_host,
            )

        logger.debug(f'initialised provider for {self._cfg.slug=}')

    @property
    def cfg(self) -> semrel_github.config.ProviderConfig:
        if not self._cfg:
            raise ProviderError('provider was not initialised')
        return self._cfg

    @property
    def github_api(self) -> github3.GitHub:
        if not self._github_api:
            raise ProviderError('provider was not initialised')
        return self._github_api

    def _repository(self) -> github3.repos.Repository:
        repository = self.github_api.repository(
            owner=self.cfg.owner,
            repository=self.cfg.repo,
        )
        if not repository:
            raise ProviderError(f'failed to retrieve repository {self.cfg.slug}')
        return repository

    @semrel_github.retry.retry_and_throttle
    def get_info(self) -> sm.RepositoryInfo:
        repository = self._repository()

        return sm.RepositoryInfo(
            owner=repository.owner.login,
            repo=repository.name,
            default_branch=repository.default_branch,
            private=bool(repository.private),
        )

    def _iter_listed_commits(self, to_sha: str) -> collections.abc.Iterable[dict]:
        repository = self._repository()

        for commit in repository.commits(
            sha=to_sha or None,
            per_page=semrel_github.routes.DEFAULT_PAGE_SIZE,
        ):
            yield commit.as_dict()

    def _iter_compared_commits(
        self,
        from_sha: str,
        to_sha: str,
    ) -> collections.abc.Iterable[dict]:
        routes = semrel_github.routes.Routes(self.github_api)

        yield from semrel_github.routes.iter_pages(
            github_api=self.github_api,
            url=routes.compare(
                owner=self.cfg.owner,
                name=self.cfg.repo,
                base=from_sha,
                head=to_sha,
            ),
            list_attr='commits',
        )

    @semrel_github.retry.retry_and_throttle
    def get_commits(self, from_sha: str, to_sha: str) -> list[sm.RawCommit]:
        # for the first release, all commits are of interest
        compare_commits = self.cfg.compare_commits and bool(from_sha)

        if compare_commits:
            commits = self._iter_compared_commits(from_sha=from_sha, to_sha=to_sha)
        else:
            commits = self._iter_listed_commits(to_sha=to_sha)

        raw_commits = []
        for commit in commits:
            # comparisons already only contain relevant commits
            if not compare_commits and from_sha and commit['sha'] == from_sha:
                break

            raw_commits.append(sm.raw_commit_from_dict(commit))

        logger.debug(f'found {len(raw_commits)} commit(s) between {from_sha=} and {to_sha=}')
        return raw_commits

    def _resolve_annotated_tag(
        self,
        repository: github3.repos.Repository,
        sha: str,
    ) -> str | None:
        '''
        returns the sha of the commit the given annotated tag points to, or None if tag could
        not be resolved, or does not point to a commit
        '''
        try:
            tag = repository.tag(sha)
        except github3.exceptions.GitHubError as ghe:
            logger.debug(f'failed to retrieve annotated tag {sha=}: {ghe}')
            return None

        if not tag or tag.object.type != COMMIT_TYPE:
            return None

        return tag.object.sha

    @semrel_github.retry.retry_and_throttle
    def get_releases(self, re: str) -> list[sm.Release]:
        tag_re = _compile(re)
        repository = self._repository()

        releases = []
        try:
            refs = list(repository.refs(subspace='tags'))
        except github3.exceptions.NotFoundError:
            # github returns 404 if there are no tags at all
            return releases

        for ref in refs:
            tag = ref.ref.removeprefix(TAG_REF_PREFIX)
            if tag_re and not tag_re.search(tag):
                continue

            obj_type = ref.object.type
            if obj_type not in (COMMIT_TYPE, TAG_TYPE):
                continue

            sha = ref.object.sha
            if obj_type == TAG_TYPE:
                if not (sha := self._resolve_annotated_tag(repository=repository, sha=sha)):
                    continue

            if not (version := semrel_github.version.parse_to_semver(
                tag,
                invalid_semver_ok=True,
            )):
                continue

            releases.append(sm.Release(sha=sha, version=str(version)))

        logger.debug(f'found {len(releases)} release(s) in {self.cfg.slug}')
        return releases

    def tag_name(self, version: str) -> str:
        if self.cfg.strip_v_tag_prefix:
            return version
        return f'v{version}'

    def create_release(self, release: sm.CreateReleaseConfig):
        tag_name = self.tag_name(release.new_version)
        prerelease = release.prerelease or semrel_github.version.is_prerelease(
            release.new_version,
        )

        repository = self._repository()

        # if branch equals sha, github will create the tag along with the release
        if release.branch != release.sha:
            _create_tag_ref(
                repository=repository,
                tag_name=tag_name,
                sha=release.sha,
            )

        _create_release(
            repository=repository,
            tag_name=tag_name,
            target_commitish=release.branch,
            body=release.changelog,
            prerelease=prerelease,
        )

    def name(self) -> str:
        return 'GitHub'

    def version(self) -> str:
        return provider_version()


_create_tag_ref = semrel_github.retry.retry_and_throttle(semrel_github.release.create_tag_ref)
_create_release = semrel_github.retry.retry_and_throttle(semrel_github.release.create_release)


def _compile(re_str: str) -> re.Pattern | None:
    if not re_str:
        return None
    try:
        return re.compile(re_str)
    except re.error as ree:
        raise ProviderError(f'invalid tag-regex {re_str=}: {ree}') from ree
