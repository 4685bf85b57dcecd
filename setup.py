#!/usr/bin/env python


from setuptools import setup, find_packages


setup(
    name="sv_breakends",
    version="1.0.0",
    description="Convert structural variant VCF records into normalized breakpoint and breakend sets",
    package_dir={"": "src"},
    packages=find_packages("src"),
    entry_points={
        "console_scripts": [
            "sv-breakends=sv_breakends.command_line:main",
            "sv_breakends=sv_breakends.command_line:main"
        ]
    },
    python_requires=">3.8",
    install_requires=[
        "pandas",
        "pysam>=0.23.3"
    ],
    extras_require={
        "tests": ["pytest", "pytest-cov"]
    },
    include_package_data=True,
    zip_safe=False
)
