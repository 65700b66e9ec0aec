#!/usr/bin/env python

from setuptools import setup
from pdfsubset import __version__ as version

setup(
    name='pdfsubset',
    version=version,
    description='Extract an ordered subset of the pages of a PDF file',
    long_description=open('README.rst').read(),
    author='pdfsubset contributors',
    platforms='Independent',
    packages=['pdfsubset', 'pdfsubset.objects'],
    license='MIT',
    python_requires='>=3.6',
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries',
        'Topic :: Printing',
        'Topic :: Utilities',
    ],
    keywords='pdf page subset extract split',
)
