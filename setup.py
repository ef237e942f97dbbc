#!/usr/bin/python
# -*- encoding: utf-8 -*-
import ast
import re

from setuptools import find_packages
from setuptools import setup

## The version number is maintained in one place only,
## as filedav.__version__
_version_re = re.compile(r"__version__\s+=\s+(.*)")
with open("filedav/__init__.py", "rb") as f:
    version = str(
        ast.literal_eval(_version_re.search(f.read().decode("utf-8")).group(1))
    )

if __name__ == "__main__":
    ## wsgidav and cheroot are used for spinning up a WebDAV
    ## server for the functional tests
    test_packages = [
        "pytest",
        "pytest-coverage",
        "coverage",
        "wsgidav",
        "cheroot",
        "pyyaml",
    ]

    setup(
        name="filedav",
        version=version,
        description="WebDAV (RFC4918) file client library",
        long_description=open("README.md").read(),
        long_description_content_type="text/markdown",
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: Apache Software License",
            "Operating System :: OS Independent",
            "Programming Language :: Python",
            "Programming Language :: Python :: 3",
            "Topic :: Internet :: WWW/HTTP",
            "Topic :: Software Development :: Libraries " ":: Python Modules",
        ],
        keywords="webdav",
        license="Apache",
        python_requires=">=3.8",
        packages=find_packages(exclude=["tests", "tests.*"]),
        include_package_data=True,
        zip_safe=False,
        install_requires=[
            "lxml",
            "requests",
            "python-dateutil",
            "typing_extensions",
        ],
        extras_require={
            "test": test_packages,
        },
    )
