from setuptools import setup
from sa._info import __version__, __long_description__

config = {
    'name':'sa',
    'version':__version__,
    'description':'Run a command on many hosts, addressed by name or group.',
    'license':'GNU GPL',
    'keywords':'ssh multiple hosts groups',
    'packages':[
        'sa',
        'sa.test',
        ],
    'long_description':__long_description__,
    'python_requires':'>=3.6',
    'install_requires': [
        'pyzmq',
        ],
    'extras_require': {
        'test': [
            'mock',
            ],
        },
    'classifiers':[
        "Development Status :: 5 - Production/Stable",
        "Topic :: Utilities",
        "License :: OSI Approved :: GNU General Public License (GPL)"
        ],
    'entry_points':{
        'console_scripts': [
            'sa = sa.main:main',
            'sa-sections = sa.sections:main',
            ]
        },
    }

setup(**config)
