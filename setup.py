from setuptools import setup
import os
import sys


if sys.version_info < (3, 8):
    raise RuntimeError("afk requires Python 3.8+")


# Find __version__ without import that requires dependencies to be installed:
exec(open(os.path.join(
    os.path.dirname(__file__), 'afk/version.py'
)).read())


with open('README.rst') as f:
    readme = f.read()


# Dependencies should be specified as a specific version or version range that
# is unlikely to break compatibility in the future. This is required to prevent
# afk from breaking when new versions of dependencies are released, especially
# for end-users (non-developers) who use pip to install afk.
install_requires = [
    'ConfigArgParse>=1.0,<2',
    'aiohttp>=3.8,<4',
    'async-timeout>=4,<6',
    'appdirs>=1.4,<1.5',
]


setup(
    name='afk-slack',
    version=__version__,
    description=('set a temporary Slack status while you are away from '
                 'keyboard'),
    long_description=readme,
    license='MIT',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: End Users/Desktop',
        'Natural Language :: English',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Communications :: Chat',
        'Environment :: Console',
    ],
    packages=['afk', 'afk.ui'],
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'afk=afk.ui.__main__:main',
        ],
    },
)
