# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

setup(
    name='parlay-league',
    version='0.1.0',
    packages=find_packages(include=['parlay']),
    url='',
    author='crash',
    author_email='',
    description='Parlay League - weekly three-pick parlays, graded against final scores',
    python_requires='>=3.10',
    install_requires=['regex',
                      'pyyaml',
                      'requests'],
    extras_require={
        'test': ['pytest']
    },
    entry_points={
        'console_scripts': [
            'game   = parlay.game:main',
            'scores = parlay.scores:main',
            'league = parlay.league:main'
        ],
    }
)
