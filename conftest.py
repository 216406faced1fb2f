# encoding: utf-8

pytest_plugins = [
    u'bbdata.tests.pytest_bbdata.bbdata_setup',
    u'bbdata.tests.pytest_bbdata.fixtures',
]
