# encoding: utf-8

import os
from setuptools import setup, find_packages

from bbdata import (__version__, __description__, __long_description__,
                    __license__)

HERE = os.path.dirname(__file__)


def _requirements(filepath):
    with open(os.path.join(HERE, filepath), "r") as f:
        return [line.strip() for line in f
                if line.strip() and not line.startswith("#")]


extras_require = {}
_extras_groups = [
    ("dev", "dev-requirements.txt"),
]

for group, filepath in _extras_groups:
    extras_require[group] = _requirements(filepath)

setup(
    name="bookbrainz-data",
    version=__version__,
    description=__description__,
    long_description=__long_description__,
    license=__license__,
    url="https://github.com/metabrainz/bookbrainz-data-js",
    python_requires=">=3.9",
    packages=find_packages(exclude=["bbdata.tests", "bbdata.tests.*"]),
    install_requires=_requirements("requirements.txt"),
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "bbdata = bbdata.cli.cli:bbdata",
        ],
    },
    classifiers=[
        "License :: OSI Approved :: GNU General Public License v2 or later "
        "(GPLv2+)",
        "Programming Language :: Python :: 3",
        "Topic :: Database",
    ],
)
