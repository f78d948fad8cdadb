from setuptools import setup
from sshmux._info import __version__, __long_description__

config = {
    'name':'sshmux',
    'version':__version__,
    'description':'SSH into multiple hosts at once, one tmux pane per host.',
    'license':'GNU GPL',
    'keywords':'ssh tmux multiple panes',
    'packages':[
        'sshmux',
        'sshmux.test',
        ],
    'long_description':__long_description__,
    'python_requires':'>=3.7',
    'install_requires': [
        'libtmux',
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
    'test_suite':'sshmux.test.suite',
    'entry_points':{
        'console_scripts': [
            'sshmux = sshmux.main:main',
            'sshmux-inline = sshmux.main:main_inline',
            ]
        },
    }

setup(**config)
