# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

'''
provider-contract as consumed by release-orchestration hosts.

A host initialises a provider once (passing its plugin-configuration as a flat str-to-str
mapping), and then queries repository-metadata, commits and existing releases, before
eventually publishing a new release.
'''

import abc

import semrel_github.model as sm


class ProviderError(RuntimeError):
    pass


class Provider:
    @abc.abstractmethod
    def init(self, config: dict[str, str]):
        raise NotImplementedError('must be implemented by its subclasses')

    @abc.abstractmethod
    def get_info(self) -> sm.RepositoryInfo:
        raise NotImplementedError('must be implemented by its subclasses')

    @abc.abstractmethod
    def get_commits(self, from_sha: str, to_sha: str) -> list[sm.RawCommit]:
        '''
        returns commits reachable from `to_sha`, newest first, excluding `from_sha` and its
        ancestors. If `from_sha` is empty, all commits reachable from `to_sha` are returned.
        '''
        raise NotImplementedError('must be implemented by its subclasses')

    @abc.abstractmethod
    def get_releases(self, re: str) -> list[sm.Release]:
        '''
        returns all existing releases (i.e. tags that parse as semver). If `re` is non-empty,
        only tags matching it are considered.
        '''
        raise NotImplementedError('must be implemented by its subclasses')

    @abc.abstractmethod
    def create_release(self, release: sm.CreateReleaseConfig):
        raise NotImplementedError('must be implemented by its subclasses')

    @abc.abstractmethod
    def name(self) -> str:
        raise NotImplementedError('must be implemented by its subclasses')

    @abc.abstractmethod
    def version(self) -> str:
        raise NotImplementedError('must be implemented by its subclasses')
