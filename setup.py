#!/usr/bin/env python3

from setuptools import find_packages, setup

from hostinspect import __version__

setup(
    name="hostinspect",
    description="Remote host inspection runner",
    long_description="Command-line client running role based diagnostic "
    + "checks on remote hosts over SSH and reporting abnormal findings.",
    version=__version__,
    python_requires=">=3.11",
    install_requires=["paramiko", "pyxdg", "ruamel.yaml", "requests", "urllib3"],
    include_package_data=True,
    extras_require={"test": ["pytest"]},
    license="License :: Other/Proprietary License",
    platforms=["Linux"],
    keywords=["inspection", "ssh", "redis", "mysql", "jumpserver"],
    packages=find_packages(exclude=["*.tests", "*.tests.*", "tests.*", "tests"]),
    entry_points={"console_scripts": ["hostinspect = hostinspect.main:main"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX :: Linux",
        "Environment :: Console",
    ],
)
