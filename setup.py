# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

import os
import setuptools


def project_path(*sub_paths):
    project_dirpath = os.path.abspath(os.path.dirname(__file__))
    return os.path.join(project_dirpath, *sub_paths)


def read(*sub_paths):
    with open(project_path(*sub_paths), mode="rb") as fobj:
        return fobj.read().decode("utf-8")


def read_requirements(*sub_paths):
    return [
        line.strip()
        for line in read(*sub_paths).splitlines()
        if line.strip() and not line.startswith("#")
    ]


install_requires = read_requirements("requirements", "pypi.txt")

tests_require = read_requirements("requirements", "test.txt")


long_description = "\n\n".join((read("README.md"), read("CHANGELOG.md")))


setuptools.setup(
    name="rabi",
    license="MIT",
    author="Andrew Burchill",
    version="2022.1009b0",
    keywords="animal identification marking color bands erasure code reed solomon hamming",
    description="Robust animal identification codes that survive the loss of marks.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["rabi"],
    package_dir={"": "src"},
    zip_safe=False,
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require={'test': tests_require},
    entry_points="""
        [console_scripts]
        rabi=rabi.cli:cli
    """,

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: POSIX",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
