# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

from unittest.mock import MagicMock

import github3.exceptions
import pytest

import semrel_github.routes as examinee

from _test_utils import fake_response


def test_routes():
    github_api = MagicMock()
    github_api.session.base_url = 'https://github.example/api/v3'
    routes = examinee.Routes(github_api)

    assert routes.repository(owner='o', name='r') == 'https://github.example/api/v3/repos/o/r'
    assert routes.compare(owner='o', name='r', base='a', head='b') == \
        'https://github.example/api/v3/repos/o/r/compare/a...b'


def test_iter_pages_follows_next_links():
    github_api = MagicMock()
    github_api._get.side_effect = [
        fake_response(json=[1, 2], next_url='https://x/items?page=2'),
        fake_response(json=[3], next_url='https://x/items?page=3'),
        fake_response(json=[]),
    ]

    assert list(examinee.iter_pages(github_api, 'https://x/items', per_page=2)) == [1, 2, 3]

    urls = [call.args[0] for call in github_api._get.call_args_list]
    assert urls == [
        'https://x/items',
        'https://x/items?page=2',
        'https://x/items?page=3',
    ]
    assert github_api._get.call_args_list[0].kwargs['params'] == {'per_page': 2}
    assert github_api._get.call_args_list[1].kwargs['params'] is None


def test_iter_pages_reads_list_attr():
    github_api = MagicMock()
    github_api._get.return_value = fake_response(json={'commits': [{'sha': 'a'}], 'total': 1})

    assert list(examinee.iter_pages(github_api, 'https://x/cmp', list_attr='commits')) == [
        {'sha': 'a'},
    ]


def test_iter_pages_is_lazy():
    github_api = MagicMock()
    github_api._get.side_effect = [
        fake_response(json=[1, 2], next_url='https://x/items?page=2'),
        fake_response(json=[3]),
    ]

    pages = examinee.iter_pages(github_api, 'https://x/items')
    assert next(pages) == 1
    assert next(pages) == 2
    assert github_api._get.call_count == 1


def test_iter_pages_raises_on_error():
    github_api = MagicMock()
    github_api._get.return_value = fake_response(
        status_code=500,
        json={'message': 'Internal Server Error'},
    )

    with pytest.raises(github3.exceptions.ServerError):
        list(examinee.iter_pages(github_api, 'https://x/items'))
