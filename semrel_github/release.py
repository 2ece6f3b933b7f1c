'''
utils wrapping github3.py's release-API
'''

import logging

import github3.repos

import semrel_github.limits
from semrel_github.provider import ProviderError

logger = logging.getLogger(__name__)


def body_or_replacement(
    body: str,
    replacement: str='body was too large (limit: {limit} / actual: {actual})',
    limit: int=semrel_github.limits.release_body,
) -> tuple[str, bool]:
    '''
    convenience function that will check whether given body is short enough to be accepted
    by GitHub's API. If so, passed body will be returned as first element of returned tuple, else
    replacement value.

    The second value of returned tuple will indicate whether original body was returned. Callers
    may use this hint to perform a mitigation.

    limit may be overwritten (but this is not recommended; see semrel_github.limits for more
    details).
    '''
    if semrel_github.limits.fits(
        body,
        limit=limit,
    ):
        return body, True

    return replacement.format(
        limit=limit,
        actual=len(body),
    ), False


def create_tag_ref(
    repository: github3.repos.Repository,
    tag_name: str,
    sha: str,
):
    '''
    creates a lightweight tag (i.e. a ref below `refs/tags/`) pointing to the given commit
    '''
    ref = repository.create_ref(f'refs/tags/{tag_name}', sha)
    if not ref:
        raise ProviderError(f'failed to create tag {tag_name=} for {sha=}')
    logger.info(f'created {ref.ref=} -> {sha=}')
    return ref


def create_release(
    repository: github3.repos.Repository,
    tag_name: str,
    target_commitish: str,
    body: str,
    prerelease: bool,
):
    body, body_fits = body_or_replacement(body)
    if not body_fits:
        logger.warning(f'release-notes for {tag_name=} exceed limit - replaced')

    release = repository.create_release(
        tag_name=tag_name,
        target_commitish=target_commitish or None,
        name=tag_name,
        body=body,
        draft=False,
        prerelease=prerelease,
    )
    if not release:
        raise ProviderError(f'failed to create release {tag_name=}')

    logger.info(f'created release {tag_name=} {prerelease=}')
    return release
