#!/usr/bin/env python

from pathlib import Path
import re

from setuptools import setup, find_namespace_packages

long_description = Path('README.md').read_text(encoding='utf-8', errors='ignore')
init_text = Path('mojiconv/__init__.py').read_text(encoding='utf-8')
version = re.search(r"^__version__ = '([^']+)'", init_text, re.MULTILINE).group(1)
description = re.search(r"^__description__ = '''(.+?)'''", init_text, re.MULTILINE | re.DOTALL).group(1)

classifiers = [  # copied from https://pypi.org/classifiers/
    'Development Status :: 5 - Production/Stable',
    'Intended Audience :: Developers',
    'Topic :: Utilities',
    'Topic :: Text Processing',
    'Topic :: Text Processing :: General',
    'Topic :: Text Processing :: Filters',
    'License :: OSI Approved :: Apache Software License',
    'Programming Language :: Python :: 3 :: Only',
]

setup(
    name='mojiconv',
    version=version,
    description=description,
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=classifiers,
    python_requires='>=3.8',
    platforms=['any'],
    packages=find_namespace_packages(include=['mojiconv', 'mojiconv.*']),
    keywords=['CSV', 'character conversion', 'grapheme clusters', 'IVS', 'Shift_JIS', 'text processing'],
    entry_points={
        'console_scripts': [
            'mc-convert=mojiconv.mc_process:main',
            'mc-mojimap=mojiconv.mc_mojimap:main',
        ],
    },
    install_requires=[
        'jsonschema>=4.0',
        'regex>=2021.8.3',
        'tqdm>=4.40',
        'unicodeblock>=0.3.1',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    include_package_data=True,
    zip_safe=False,
)
