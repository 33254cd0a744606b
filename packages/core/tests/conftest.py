"""Shared fakes for the summarizer tests.

The host and generator are MagicMocks: summarizers receive them as
constructor arguments, so no test touches PyGithub or a provider SDK.
"""

import itertools
from unittest.mock import MagicMock

import pytest

from prscribe_core.config import DEFAULT_CONFIG
from prscribe_core.models import PullRequestInfo
from prscribe_core.utils.links import LinkBase

SERVER = "https://github.com"
BASE_SHA = "b" * 40
HEAD_SHA = "f" * 40


@pytest.fixture
def config():
    return {**DEFAULT_CONFIG, "ignore_files": [], "include_files": []}


@pytest.fixture
def host():
    host = MagicMock()
    host.server_url = SERVER
    host.link_base = LinkBase(SERVER, "octo", "repo")
    host.get_tree_shas.return_value = {}
    host.list_pull_files.return_value = []
    host.list_review_comments.return_value = []
    host.list_issue_comments.return_value = []
    host.list_pull_commits.return_value = []
    host.create_review_comment.side_effect = itertools.count(100)
    host.create_issue_comment.side_effect = itertools.count(500)
    return host


@pytest.fixture
def generator():
    generator = MagicMock()
    generator.generate.return_value = "* generated summary"
    return generator


@pytest.fixture
def pull():
    return PullRequestInfo(number=7, base_sha=BASE_SHA, head_sha=HEAD_SHA)
