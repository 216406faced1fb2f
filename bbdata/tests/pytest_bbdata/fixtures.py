"""This is a collection of pytest fixtures for use in tests.

There are three type of fixtures available:

* Fixtures that have some side-effect. They don't return any useful
  value and generally should be injected via
  ``pytest.mark.usefixtures``. Ex.: `clean_db`.

* Fixtures that provide value. Ex. `cli`, `session`

* Fixtures that provide factory function. Ex. `reset_db`. Main use-case
  is repeatable execution (ex.: cleaning database more than once in a
  single test).

Model fixtures such as ``editor`` or ``editor_factory`` are generated by
``pytest_factoryboy`` from :py:mod:`bbdata.tests.factories`.

"""
from __future__ import annotations

import copy

import pytest
from pytest_factoryboy import register

import bbdata.tests.helpers as test_helpers
import bbdata.tests.factories as factories

import bbdata.model as model
from bbdata.common import config


@register
class LanguageFactory(factories.Language):
    pass


@register
class GenderFactory(factories.Gender):
    pass


@register
class EditorTypeFactory(factories.EditorType):
    pass


@register
class EditorFactory(factories.Editor):
    pass


@register
class RevisionFactory(factories.Revision):
    pass


@register
class AliasFactory(factories.Alias):
    pass


@register
class IdentifierTypeFactory(factories.IdentifierType):
    pass


@register
class IdentifierFactory(factories.Identifier):
    pass


@register
class RelationshipTypeFactory(factories.RelationshipType):
    pass


@register
class RelationshipAttributeTypeFactory(factories.RelationshipAttributeType):
    pass


@register
class AuthorFactory(factories.Author):
    pass


@register
class WorkFactory(factories.Work):
    pass


@pytest.fixture
def bbdata_config(request: pytest.FixtureRequest,
                  monkeypatch: pytest.MonkeyPatch):
    """Allows to override the configuration object used by tests

    Takes into account config patches introduced by the ``bbdata_config``
    mark.

    If you just want to set one or more configuration options for the
    scope of a test (or a test class), use the ``bbdata_config`` mark::

        @pytest.mark.bbdata_config('bbdata.redirect.max_depth', 2)
        def test_short_redirect_chains():

            # ...

    """
    _original = copy.deepcopy(config.copy())
    for mark in request.node.iter_markers(u"bbdata_config"):
        monkeypatch.setitem(config, *mark.args)

    yield config
    config.clear()
    config.update(_original)


@pytest.fixture
def cli(bbdata_config):
    """Provides object for invoking CLI commands from tests.

    This is subclass of `click.testing.CliRunner`, so all examples
    from `Click docs
    <https://click.palletsprojects.com/en/master/testing/>`_ are valid
    for it.

    """
    env = {}
    if u'__file__' in bbdata_config:
        env[u'BBDATA_INI'] = bbdata_config[u'__file__']
    return test_helpers.BBDataCliRunner(env=env)


@pytest.fixture(scope=u"session")
def reset_db():
    """Callable for resetting the database to the initial state.

    If possible use the ``clean_db`` fixture instead.

    """
    factories.fake.unique.clear()
    return test_helpers.reset_db


@pytest.fixture
def clean_db(reset_db):
    """Resets the database to the initial state.

    This can be used either for all tests in a class::

        @pytest.mark.usefixtures("clean_db")
        class TestExample(object):

            def test_example(self):

    or for a single test::

        class TestExample(object):

            @pytest.mark.usefixtures("clean_db")
            def test_example(self):

    """
    reset_db()


@pytest.fixture
def session(clean_db):
    """The scoped session, rolled back after the test.

    Library functions only flush, so everything a test writes through them
    is thrown away here.
    """
    yield model.Session
    model.Session.rollback()
    model.Session.remove()
