# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import logging
import re
import typing

import semver

logger = logging.getLogger(__name__)

Version = semver.VersionInfo | str

# up to three numeric components, optionally followed by prerelease and/or build-metadata
_relaxed_version_re = re.compile(r'(?P<numeric>[0-9]+(?:\.[0-9]+){0,2})(?P<suffix>[-+].*)?')


def parse_to_semver(
    version,
    invalid_semver_ok: bool=False,
) -> semver.VersionInfo | None:
    '''
    parses the given version into a semver.VersionInfo object.

    Different from strict semver, the given version is preprocessed, if required, to
    convert the version into a valid semver version, if possible.

    The following preprocessings are done:

    - strip away `v` prefix
    - append minor- and patch-level `.0` for one- or two-digit versions
    - rm leading zeroes

    @param version: either a str, or an object with a `version` attr
    '''
    if isinstance(version, str):
        version_str = version
    elif isinstance(version, semver.VersionInfo):
        return version
    elif version is None:
        raise ValueError('version must not be None')
    elif hasattr(version, 'version'):
        version_str = str(version.version)
    else:
        logger.warning(f'unexpected type for version: {type(version)}')
        version_str = str(version) # fallback

    try:
        semver_version_info, _ = _parse_to_semver_and_prefix(version_str)
    except ValueError:
        if invalid_semver_ok:
            return None

        raise

    return semver_version_info


def _parse_to_semver_and_prefix(version: str) -> tuple[semver.VersionInfo, str | None]:
    def raise_invalid():
        raise ValueError(f'not a valid (semver) version: `{version}`')

    if not version:
        raise_invalid()

    semver_version = version
    prefix = None

    # strip leading `v`
    if version[0] == 'v':
        semver_version = version[1:]
        prefix = 'v'

    # in most cases, we should be fine now
    try:
        return semver.VersionInfo.parse(semver_version), prefix
    except ValueError:
        pass # try extending missing version-parts, and stripping leading zeroes

    if not (match := _relaxed_version_re.fullmatch(semver_version)):
        raise_invalid()

    numeric = [str(int(part)) for part in match.group('numeric').split('.')]
    numeric += ['0'] * (3 - len(numeric))
    suffix = match.group('suffix') or ''

    try:
        return semver.VersionInfo.parse('.'.join(numeric) + suffix), prefix
    except ValueError:
        # re-raise with original version str
        raise_invalid()


def is_semver_parseable(version_string: str) -> bool:
    try:
        parse_to_semver(version_string)
    except ValueError:
        logger.debug(f"Could not parse '{version_string}' as semver version")
        return False
    return True


def is_prerelease(version: Version) -> bool:
    return bool(parse_to_semver(version).prerelease)


T = typing.TypeVar('T', semver.VersionInfo, str)


def greatest_version(
    versions: collections.abc.Iterable[T],
    ignore_prerelease_versions: bool=False,
    invalid_semver_ok: bool=False,
) -> T | None:
    '''
    returns the greatest version from the passed versions. versions are parsed as semver versions
    using relaxed semver (which allows a `v` prefix, as well as omitting minor- and patchlevel).
    if `ignore_prerelease_versions` is set to True, only final release versions will be considered.
    if `invalid_semver_ok` is set to True, versions that are not valid (relaxed) semver versions
    are silently ignored (will raise otherwise).
    '''
    greatest_candidate = None
    greatest_candidate_semver = None

    for candidate in versions:
        if isinstance(candidate, str):
            candidate_semver = parse_to_semver(
                version=candidate,
                invalid_semver_ok=invalid_semver_ok,
            )

            if not candidate_semver:
                continue
        else:
            candidate_semver = candidate

        if ignore_prerelease_versions and candidate_semver.prerelease:
            continue

        if not greatest_candidate_semver or candidate_semver > greatest_candidate_semver:
            greatest_candidate_semver = candidate_semver
            greatest_candidate = candidate

    return greatest_candidate
