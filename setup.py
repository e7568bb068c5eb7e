#!/usr/bin/env python

from setuptools import setup

setup(
    name="elastic-schema",
    version="0.3.0",
    description="Field definitions, mappings and aggregation trees for Elasticsearch",
    author="Wouter van Atteveldt",
    author_email="wouter@vanatteveldt.com",
    packages=["elastic_schema", "elastic_schema.nodes"],
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.11",
    keywords=["elasticsearch", "mapping", "aggregation"],
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Topic :: Database",
    ],
    install_requires=[
        "elasticsearch~=8.6",
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings",
        "class-doc",
        "tzdata",
    ],
    extras_require={
        'dev': [
            'pytest',
            'mypy',
            'flake8',
        ]
    },
)
