# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

'''
serves a provider to a release-orchestration host, using a line-delimited JSON protocol on
a pair of text streams (typically stdin/stdout).

requests:  {"id": <any>, "method": <str>, "params": {...}}
responses: {"id": <any>, "result": <any>} or {"id": <any>, "error": <str>}
'''

import collections.abc
import dataclasses
import json
import logging
import sys
import typing

import dacite
import github3.exceptions

import semrel_github.model as sm
from semrel_github.provider import (
    Provider,
    ProviderError,
)

logger = logging.getLogger(__name__)

INIT = 'Init'
GET_INFO = 'GetInfo'
GET_COMMITS = 'GetCommits'
GET_RELEASES = 'GetReleases'
CREATE_RELEASE = 'CreateRelease'
NAME = 'Name'
VERSION = 'Version'

METHODS = (
    INIT,
    GET_INFO,
    GET_COMMITS,
    GET_RELEASES,
    CREATE_RELEASE,
    NAME,
    VERSION,
)

# errors reported to host (instead of terminating the serving-loop)
HANDLED_ERRORS = (
    ProviderError,
    ValueError,
    KeyError,
    TypeError,
    github3.exceptions.GitHubException,
    dacite.DaciteError,
)


class ProtocolError(ValueError):
    pass


def to_wire(value):
    if dataclasses.is_dataclass(value):
        return sm.as_dict(value)
    if isinstance(value, list):
        return [to_wire(v) for v in value]
    return value


def dispatch(
    provider: Provider,
    method: str,
    params: dict | None,
):
    '''
    invokes the given provider-method, passing the given params, and returns the result in
    wire-format (i.e. json-serialisable)
    '''
    if method not in METHODS:
        raise ProtocolError(f'unknown method: {method}')

    params = params or {}
    if not isinstance(params, dict):
        raise ProtocolError('params must be an object')

    if method == INIT:
        config = params.get('config') or {}
        if not isinstance(config, dict):
            raise ProtocolError('config must be an object')
        result = provider.init(config=config)
    elif method == GET_INFO:
        result = provider.get_info()
    elif method == GET_COMMITS:
        result = provider.get_commits(
            from_sha=params.get('from_sha', ''),
            to_sha=params['to_sha'],
        )
    elif method == GET_RELEASES:
        result = provider.get_releases(params.get('re', ''))
    elif method == CREATE_RELEASE:
        result = provider.create_release(sm.CreateReleaseConfig.from_dict(params))
    elif method == NAME:
        result = provider.name()
    else:
        result = provider.version()

    return to_wire(result)


def handle_request(
    provider: Provider,
    line: str,
) -> dict:
    request_id = None
    try:
        request = json.loads(line)
        if not isinstance(request, dict):
            raise ProtocolError('request must be an object')
        request_id = request.get('id')
        method = request.get('method')
        if not method:
            raise ProtocolError('method must be specified')

        logger.debug(f'handling {request_id=} {method=}')
        result = dispatch(
            provider=provider,
            method=method,
            params=request.get('params'),
        )
    except json.JSONDecodeError as jde:
        logger.warning(f'received malformed request: {jde}')
        return {'id': request_id, 'error': f'malformed request: {jde}'}
    except HANDLED_ERRORS as e:
        logger.warning(f'error while processing {request_id=}: {e}')
        return {'id': request_id, 'error': str(e) or type(e).__name__}

    return {'id': request_id, 'result': result}


def serve(
    provider: Provider,
    instream: typing.TextIO=None,
    outstream: typing.TextIO=None,
) -> int:
    '''
    reads requests from `instream` (one per line) until EOF, writing one response for each
    request to `outstream`. Returns the number of handled requests.
    '''
    instream = instream or sys.stdin
    outstream = outstream or sys.stdout

    handled = 0
    for line in _non_empty_lines(instream):
        response = handle_request(provider=provider, line=line)
        outstream.write(json.dumps(response) + '\n')
        outstream.flush()
        handled += 1

    logger.debug(f'reached EOF after {handled=} request(s)')
    return handled


def _non_empty_lines(stream: typing.TextIO) -> collections.abc.Iterable[str]:
    for line in stream:
        if line := line.strip():
            yield line
