#!/usr/bin/env python

import re
from pathlib import Path

from setuptools import setup, find_packages


def open_reqs_file(file, reqs_path=Path(".")):
    with (reqs_path / file).open() as f:
        reqs = list(f.read().strip().split("\n"))

    i = 0
    while i < len(reqs):
        if reqs[i].startswith("-r"):
            reqs[i : i + 1] = open_reqs_file(reqs[i][2:].strip(), reqs_path=reqs_path)
        else:
            i += 1

    return reqs


def get_version():
    text = Path("elasticarray/_version.py").read_text()
    return re.search(r'__version__ = version = "([^"]+)"', text).group(1)


extras_require = {}
reqs = []


def parse_requires():
    reqs_path = Path("./requirements")
    reqs.extend(open_reqs_file("requirements.txt", reqs_path=reqs_path))
    for f in reqs_path.iterdir():
        if f.name != "requirements.txt":
            extras_require[f.stem] = open_reqs_file(f.parts[-1], reqs_path=reqs_path)


parse_requires()

with open("README.rst") as f:
    long_desc = f.read()

setup(
    name="elasticarray",
    version=get_version(),
    description="Dense n-dimensional arrays resizable in their last dimension",
    license="MIT",
    keywords="numpy,array,resizable,append",
    packages=find_packages(include=["elasticarray", "elasticarray.*"]),
    long_description=long_desc,
    long_description_content_type="text/x-rst",
    install_requires=reqs,
    extras_require=extras_require,
    zip_safe=False,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
    ],
    python_requires=">=3.9, <4",
)
