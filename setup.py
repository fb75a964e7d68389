# SPDX-FileCopyrightText: 2025 shamir-consensus contributors
# SPDX-License-Identifier: MIT

from setuptools import find_packages, setup

setup(
    name="shamir-consensus",
    version="0.1.0",
    description="Threshold secret reconstruction with majority-vote detection of corrupted shares",
    author="shamir-consensus contributors",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "click<9.0,>=8.1",
        "tqdm>=4.66.0",
    ],
    extras_require={
        # dev / testing
        "test": [
            "pytest>=8.0.0",
            "pytest-timeout>=2.3.0",
            "hypothesis>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "shamir-consensus=shamir_consensus.cli:main",
        ],
    },
)
