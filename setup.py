# -*- coding: utf-8 -*-
import os

from setuptools import setup, find_packages

VERSION="0.3.1"
AUTHOR = "tasknest Development Team"
AUTHOR_EMAIL = "tasknest-users@googlegroups.com"

# read requirements from file
requires_file=os.path.join(os.path.dirname(os.path.abspath(__file__)),"requirements.txt")
with open(requires_file) as file_handle:
    requires=[line.strip() for line in file_handle.readlines() if line.strip()]

setup(
    name='tasknest',
    author=AUTHOR,
    author_email=AUTHOR_EMAIL,
    version=VERSION,
    license="MIT",
    description="tasknest: namespaced build tasks with dependencies",
    long_description="tasknest runs tasks declared in Python build scripts. "+\
        "Tasks live in nested namespaces and name the tasks they depend on; "+\
        "invoking a task first invokes every dependency, in declaration order "+\
        "and at most once, and detects circular dependencies. Task actions "+\
        "may finish synchronously or signal completion later.",
    keywords=['build','make','rake','task','dependencies','automation'],
    platforms=['Linux','MacOS'],
    classifiers=[
        "Programming Language :: Python",
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Operating System :: MacOS",
        "Operating System :: Unix",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Build Tools"
        ],
    packages=find_packages(exclude=['ez_setup', 'tests', 'tests.*']),
    zip_safe=False,
    python_requires=">=3.6",
    entry_points={
        'console_scripts': [
            'tasknest = tasknest.cli:main',
        ]
    },
    install_requires=requires,
    test_suite="tests.test_suite",
)
