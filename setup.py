# -*- coding: utf-8 -*-

from setuptools import setup, find_packages


setup(
    name="nessie",
    version="0.1.0",
    description="Instruction-level MOS 6502 emulator",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["nessie", "nessie.*"]),
    python_requires=">=3.8",
    install_requires=[
        "more-itertools",
        "numpy",
    ],
    extras_require={
        "test": [
            "parameterized",
            "pytest",
        ],
    },
    entry_points={"console_scripts": []},
    classifiers=[
        "Environment :: Console",
        "Intended Audience :: Developers",
        'License :: OSI Approved :: MIT License',
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: System :: Emulators",
    ],
)
