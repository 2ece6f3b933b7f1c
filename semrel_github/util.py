# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import os
import pathlib

import yaml

_TRUE_LITERALS = ('1', 't', 'T', 'TRUE', 'true', 'True')
_FALSE_LITERALS = ('0', 'f', 'F', 'FALSE', 'false', 'False')


def parse_bool(value: str | bool) -> bool:
    '''
    parses the given value into a bool, accepting the same literals as Go's `strconv.ParseBool`
    (which is what release-orchestration hosts typically pass as plugin-configuration).

    @raises ValueError if value is not one of the accepted literals
    '''
    if isinstance(value, bool):
        return value
    if value in _TRUE_LITERALS:
        return True
    if value in _FALSE_LITERALS:
        return False

    raise ValueError(f'invalid syntax for bool: {value!r}')


def existing_file(path):
    if isinstance(path, pathlib.Path):
        is_file = path.is_file()
    else:
        is_file = os.path.isfile(path)
    if not is_file:
        raise ValueError(f'not an existing file: {path}')
    return path


def parse_yaml_file(path, max_elements_count=100000):
    existing_file(path)

    with open(path) as f:
        parsed = yaml.load(f, Loader=yaml.SafeLoader)
        # mitigate yaml bomb
        _count_elements(parsed, max_elements_count=max_elements_count)
        return parsed


def _count_elements(value, count=0, max_elements_count=100000):
    '''
    recursively counts elements contained in the given value. Before each recursion step,
    the amount of encountered elements is checked against a maximum allowed elements count.
    If said threshold is exceeded, recursion is aborted and a `ValueError` is raised.

    This function is intended to be used as a mitigation against "Billion laughs attack"
    (https://en.wikipedia.org/wiki/Billion_laughs_attack).

    @param value: typically a dict or a list. Other types will yield a count of 1
    '''
    if count > max_elements_count:
        raise ValueError('dict too large')

    if not isinstance(value, dict):
        if isinstance(value, list):
            leng = 0
            for e in value:
                leng += _count_elements(
                    e,
                    count=count+leng,
                    max_elements_count=max_elements_count,
                )
            return leng
        else:
            return 1

    leng = 0

    for value in value.values():
        leng += _count_elements(
            value,
            count=count+leng,
            max_elements_count=max_elements_count,
        )

    return leng


def urljoin(*parts):
    if len(parts) == 1:
        return parts[0]
    first = parts[0]
    last = parts[-1]
    middle = parts[1:-1]

    first = first.rstrip('/')
    middle = list(map(lambda s: s.strip('/'), middle))
    last = last.lstrip('/')

    return '/'.join([first] + middle + [last])
