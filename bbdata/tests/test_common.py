# encoding: utf-8

import logging
from unittest import mock

import pytest

from bbdata.common import BBDataConfig, asbool, asint, config
from bbdata.config.declaration import Declaration, declaration
from bbdata.config.environment import update_config
from bbdata.exceptions import BBDataConfigurationException


class TestBBDataConfig(object):
    def test_mapping(self):
        my_conf = BBDataConfig({u'a': 1})
        my_conf[u'b'] = 2
        del my_conf[u'a']
        assert dict(my_conf) == {u'b': 2}
        assert len(my_conf) == 1

    def test_declared_default(self):
        my_conf = BBDataConfig()
        assert my_conf.get(u'bbdata.redirect.max_depth') == 50
        assert my_conf.get(u'bbdata.redirect.max_depth', 3) == 3

    def test_undeclared_option(self):
        assert BBDataConfig().get(u'not.declared') is None

    def test_strict_mode_warns(self, caplog):
        my_conf = BBDataConfig({u'config.mode': u'strict'})
        with caplog.at_level(logging.WARNING, logger=u'bbdata.common'):
            my_conf.get(u'not.declared')
            my_conf.get(u'also.not.declared', None)
        assert u'Option not.declared is not declared' in caplog.text
        assert u'also.not.declared' not in caplog.text

    def test_global_config_is_loaded(self):
        assert config[u'sqlalchemy.url']
        assert config[u'bbdata.redirect.max_depth'] == 50


class TestConverters(object):
    @pytest.mark.parametrize(u'value, expected', [
        (u'true', True), (u' Yes ', True), (u'0', False), (u'off', False),
        (True, True), (0, False),
    ])
    def test_asbool(self, value, expected):
        assert asbool(value) is expected

    def test_asbool_invalid(self):
        with pytest.raises(ValueError):
            asbool(u'maybe')

    def test_asint(self):
        assert asint(u'111') == 111
        with pytest.raises(ValueError):
            asint(u'eleven')


class TestDeclaration(object):
    def test_core_options(self):
        assert u'sqlalchemy.url' in declaration
        assert declaration.default(u'config.mode') == u'default'
        assert declaration.default(u'not.declared') is None

    def test_normalize(self):
        conf = {u'sqlalchemy.echo': u'yes'}
        declaration.normalize(conf)
        assert conf[u'sqlalchemy.echo'] is True
        assert conf[u'bbdata.redirect.max_depth'] == 50
        assert conf[u'bbdata.editor.deleted_name_template'] == \
            u'Deleted Editor #{id}'
        assert u'sqlalchemy.url' not in conf

    def test_validate(self):
        assert declaration.validate({u'sqlalchemy.url': u'sqlite://'}) == []
        assert declaration.validate({}) == [
            u'Missing required option: sqlalchemy.url']

    def test_setup_is_idempotent(self):
        decl = Declaration()
        decl.setup()
        options = list(decl)
        decl.setup()
        assert list(decl) == options


class TestUpdateConfig(object):
    def test_env_var_overrides_url(self, bbdata_config, monkeypatch):
        monkeypatch.setenv(u'BBDATA_SQLALCHEMY_URL', u'sqlite:///:memory:')
        with mock.patch(u'bbdata.model.init_model') as init_model:
            update_config()

        assert bbdata_config[u'sqlalchemy.url'] == u'sqlite:///:memory:'
        engine = init_model.call_args[0][0]
        assert engine.dialect.name == u'sqlite'

    def test_missing_url(self, bbdata_config, monkeypatch):
        monkeypatch.delenv(u'BBDATA_SQLALCHEMY_URL', raising=False)
        del bbdata_config[u'sqlalchemy.url']
        with mock.patch(u'bbdata.model.init_model') as init_model:
            with pytest.raises(BBDataConfigurationException):
                update_config()
        assert not init_model.called
