# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import argparse
import json
import logging
import sys

import github3.exceptions

import semrel_github.config
import semrel_github.github_provider
import semrel_github.log
import semrel_github.model as sm
import semrel_github.plugin
import semrel_github.version
from semrel_github.provider import ProviderError

logger = logging.getLogger(__name__)


def _plugin_cfg(parsed: argparse.Namespace) -> dict[str, str]:
    cfg = {
        semrel_github.config.SLUG: parsed.slug,
        semrel_github.config.TOKEN: parsed.token,
        semrel_github.config.ENTERPRISE_HOST: parsed.enterprise_host,
    }
    if parsed.compare_commits:
        cfg[semrel_github.config.USE_COMPARE_COMMITS] = 'true'
    if parsed.strip_v_tag_prefix:
        cfg[semrel_github.config.STRIP_V_TAG_PREFIX] = 'true'

    return {k: v for k, v in cfg.items() if v}


def _print_json(value, outfh=None):
    outfh = outfh or sys.stdout
    outfh.write(json.dumps(semrel_github.plugin.to_wire(value), indent=2) + '\n')


def info(provider, parsed):
    _print_json(provider.get_info())


def commits(provider, parsed):
    _print_json(provider.get_commits(
        from_sha=parsed.from_sha,
        to_sha=parsed.to_sha,
    ))


def releases(provider, parsed):
    found = provider.get_releases(parsed.regex)

    if not parsed.latest:
        _print_json(found)
        return

    versions = {release.version: release for release in found}
    latest = semrel_github.version.greatest_version(
        versions.keys(),
        ignore_prerelease_versions=not parsed.include_prereleases,
    )
    _print_json(versions.get(latest))


def create_release(provider, parsed):
    if parsed.changelog_file:
        with open(parsed.changelog_file) as f:
            changelog = f.read()
    else:
        changelog = ''

    provider.create_release(sm.CreateReleaseConfig(
        new_version=parsed.version,
        sha=parsed.sha,
        branch=parsed.branch or '',
        changelog=changelog,
        prerelease=parsed.prerelease,
    ))


def serve(provider, parsed):
    # host passes plugin-cfg using `Init`; cli-args are only defaults
    semrel_github.plugin.serve(provider=_DefaultsProvider(provider, _plugin_cfg(parsed)))


class _DefaultsProvider:
    '''
    wraps a provider, merging plugin-cfg passed by host with defaults from cli-args
    '''
    def __init__(self, provider, defaults: dict[str, str]):
        self._provider = provider
        self._defaults = defaults

    def init(self, config: dict[str, str]):
        return self._provider.init(config=self._defaults | {k: v for k, v in config.items() if v})

    def __getattr__(self, name):
        return getattr(self._provider, name)


def parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='semrel-provider-github',
        description='release-metadata provider for repositories hosted on GitHub',
    )
    parser.add_argument(
        '--config',
        default=None,
        help='path to a YAML file to read provider-cfg from (attributes as for plugin-cfg)',
    )
    parser.add_argument(
        '--slug',
        default=None,
        help='<owner>/<repo> (defaults to env-var GITHUB_REPOSITORY)',
    )
    parser.add_argument(
        '--token',
        default=None,
        help='github-auth-token (defaults to env-vars GITHUB_TOKEN, or GH_TOKEN)',
    )
    parser.add_argument(
        '--enterprise-host',
        default=None,
        help='GitHub-Enterprise hostname (defaults to env-var GITHUB_ENTERPRISE_HOST)',
    )
    parser.add_argument(
        '--compare-commits',
        action='store_true',
        help='use compare-api for retrieving commits',
    )
    parser.add_argument(
        '--strip-v-tag-prefix',
        action='store_true',
        help='do not prefix release-tags with `v`',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
    )

    sub_parsers = parser.add_subparsers(dest='command', required=True)

    info_parser = sub_parsers.add_parser('info', help='print repository-info')
    info_parser.set_defaults(func=info)

    commits_parser = sub_parsers.add_parser('commits', help='print commits between two commits')
    commits_parser.add_argument('--from', dest='from_sha', default='')
    commits_parser.add_argument('--to', dest='to_sha', required=True)
    commits_parser.set_defaults(func=commits)

    releases_parser = sub_parsers.add_parser('releases', help='print existing releases')
    releases_parser.add_argument('--regex', default='', help='only consider matching tags')
    releases_parser.add_argument(
        '--latest',
        action='store_true',
        help='only print greatest release',
    )
    releases_parser.add_argument(
        '--include-prereleases',
        action='store_true',
        help='consider prereleases for --latest',
    )
    releases_parser.set_defaults(func=releases)

    release_parser = sub_parsers.add_parser('create-release', help='create a new release')
    release_parser.add_argument('--version', required=True, help='new (semver) version')
    release_parser.add_argument('--sha', required=True, help='commit to tag')
    release_parser.add_argument('--branch', default=None, help='target-commitish')
    release_parser.add_argument('--changelog-file', default=None)
    release_parser.add_argument('--prerelease', action='store_true')
    release_parser.set_defaults(func=create_release)

    serve_parser = sub_parsers.add_parser(
        'serve',
        help='serve provider-contract using line-delimited JSON on stdin/stdout',
    )
    serve_parser.set_defaults(func=serve)

    return parser


def main(argv: list[str]=None) -> int:
    parsed = parser().parse_args(argv)

    semrel_github.log.configure_default_logging(
        stdout_level=logging.DEBUG if parsed.verbose else logging.INFO,
    )

    provider = semrel_github.github_provider.GitHubRepository(config_file=parsed.config)

    try:
        # the host passes plugin-cfg when serving
        if parsed.func is not serve:
            provider.init(config=_plugin_cfg(parsed))
        parsed.func(provider, parsed)
    except (ProviderError, ValueError, github3.exceptions.GitHubException) as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
