# encoding: utf-8

"""This is a collection of helper functions for use in tests.

We want to avoid sharing test helper functions between test modules as
much as possible, and we definitely don't want to introduce a complex
hierarchy of test class subclasses, etc.

Consider using fixtures from :py:mod:`bbdata.tests.pytest_bbdata.fixtures`
whenever possible for setting up the initial state of a test.

"""
from __future__ import annotations

import logging

from click.testing import CliRunner

import bbdata.model as model

log = logging.getLogger(__name__)


def reset_db():
    """Reset the database.

    Rather than use this function directly, use the ``clean_db`` fixture
    either for all tests in a class::

        @pytest.mark.usefixtures("clean_db")
        class TestExample(object):

            def test_example(self):

    or for a single test::

        class TestExample(object):

            @pytest.mark.usefixtures("clean_db")
            def test_example(self):

    :returns: ``None``

    """
    # Close any database connections that have been left open.
    model.close_all_sessions()

    model.repo.rebuild_db()


class BBDataCliRunner(CliRunner):
    def invoke(self, *args, **kwargs):
        kwargs.setdefault(u'complete_var', u'_BBDATA_COMPLETE')
        return super(BBDataCliRunner, self).invoke(*args, **kwargs)
