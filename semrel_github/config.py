# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import collections.abc
import dataclasses
import logging
import os

import dacite

import semrel_github.util
from semrel_github.provider import ProviderError

logger = logging.getLogger(__name__)

ENTERPRISE_HOST = 'github_enterprise_host'
SLUG = 'slug'
TOKEN = 'token'
USE_COMPARE_COMMITS = 'github_use_compare_commits'
STRIP_V_TAG_PREFIX = 'strip_v_tag_prefix'

KNOWN_KEYS = (
    ENTERPRISE_HOST,
    SLUG,
    TOKEN,
    USE_COMPARE_COMMITS,
    STRIP_V_TAG_PREFIX,
)

# evaluated in given order; first non-empty value wins
ENV_FALLBACKS = {
    ENTERPRISE_HOST: ('GITHUB_ENTERPRISE_HOST',),
    SLUG: ('GITHUB_REPOSITORY',),
    TOKEN: ('GITHUB_TOKEN', 'GH_TOKEN'),
}


@dataclasses.dataclass(frozen=True)
class ProviderConfig:
    owner: str
    repo: str
    token: str = dataclasses.field(repr=False)
    enterprise_host: str | None = None
    compare_commits: bool = False
    strip_v_tag_prefix: bool = False

    @property
    def slug(self) -> str:
        return f'{self.owner}/{self.repo}'


def _stringify(value) -> str:
    # YAML-documents may contain native booleans; plugin-cfg is always passed as str
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return ''
    return str(value)


def _config_from_file(path: str) -> dict[str, str]:
    raw = semrel_github.util.parse_yaml_file(path) or {}
    if not isinstance(raw, dict):
        raise ProviderError(f'expected a mapping in {path=}')

    cfg = {}
    for key, value in raw.items():
        if key not in KNOWN_KEYS:
            logger.debug(f'ignoring unknown attribute {key=} in {path=}')
            continue
        cfg[key] = _stringify(value)

    return cfg


def _non_empty(config: collections.abc.Mapping[str, str]) -> dict[str, str]:
    return {
        key: _stringify(value) for key, value in config.items()
        if _stringify(value)
    }


def provider_config(
    config: collections.abc.Mapping[str, str],
    env: collections.abc.Mapping[str, str]=None,
    config_file: str=None,
) -> ProviderConfig:
    '''
    returns the effective provider-configuration. Values are looked up (in descending order of
    precedence) from the given `config` (typically passed by the release-orchestration host),
    from an optional YAML `config_file`, and (for the attributes listed in `ENV_FALLBACKS`)
    from environment variables.

    @raises ProviderError if configuration is incomplete or invalid
    '''
    if env is None:
        env = os.environ

    if config_file:
        merged = _config_from_file(config_file)
    else:
        merged = {}
    merged |= _non_empty(config or {})

    for key, env_names in ENV_FALLBACKS.items():
        if merged.get(key):
            continue
        for env_name in env_names:
            if value := env.get(env_name):
                merged[key] = value
                break

    token = merged.get(TOKEN)
    if not token:
        raise ProviderError('github token missing')

    slug = merged.get(SLUG, '')
    if not '/' in slug:
        raise ProviderError('invalid slug')
    owner, repo = slug.split('/')[:2]

    strip_v_tag_prefix = merged.get(STRIP_V_TAG_PREFIX, '')
    if strip_v_tag_prefix:
        try:
            strip_v_tag_prefix = semrel_github.util.parse_bool(strip_v_tag_prefix)
        except ValueError as ve:
            raise ProviderError(f'failed to set property {STRIP_V_TAG_PREFIX}: {ve}') from ve
    else:
        strip_v_tag_prefix = False

    return dacite.from_dict(
        data_class=ProviderConfig,
        data={
            'owner': owner,
            'repo': repo,
            'token': token,
            'enterprise_host': merged.get(ENTERPRISE_HOST) or None,
            'compare_commits': merged.get(USE_COMPARE_COMMITS) == 'true',
            'strip_v_tag_prefix': strip_v_tag_prefix,
        },
    )
