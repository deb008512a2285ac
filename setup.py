# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from setuptools import setup, find_packages

setup(
    name="embedgen",
    version="0.1.0",
    description="Template-driven Go code generation bound by embedded types",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["embedgen", "embedgen.*"]),
    install_requires=[
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "pyyaml>=6.0",
        "rich>=13.0",
        "tree-sitter>=0.23",
        "tree-sitter-go>=0.23",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
    license="MIT",
    entry_points={
        'console_scripts': [
            'embedgen=embedgen.cli:main',
        ],
    },
    python_requires=">=3.10",
)
