#!/usr/bin/env python

from setuptools import setup, find_namespace_packages

setup(
    name="python-networkd",
    version="0.1.0",
    description="Client library to query systemd-networkd over D-Bus.",
    author="Proton AG",
    author_email="opensource@proton.me",
    packages=find_namespace_packages(include=[
        "networkd*",
    ]),
    include_package_data=True,
    install_requires=["pygobject"],
    extras_require={
        "development": ["wheel", "pytest", "pytest-cov", "flake8", "pylint"]
    },
    python_requires=">=3.8",
    license="GPLv3",
    platforms="Linux",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python",
        "Topic :: System :: Networking",
    ]
)
