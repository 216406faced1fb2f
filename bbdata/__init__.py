# encoding: utf-8

__version__ = '0.1.0'

__description__ = 'BookBrainz data access layer'
__long_description__ = \
'''
Object-relational mappings and revision helpers for the BookBrainz
collaborative metadata database: entities (authors, works, editions,
edition groups, publishers and series), editors, revisions and the
append-only alias, identifier and relationship sets that hang off every
entity revision.
'''
__license__ = 'GPL-2.0-or-later'
