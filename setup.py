"""
Setup script for xmlsimple, path-addressed access to XML documents.
"""

from setuptools import setup, find_packages

setup(
    name="xmlsimple",
    version="1.0.0",
    description="Path based reading and streaming of XML documents",
    author="xmlsimple Team",
    packages=find_packages(include=["xmlsimple", "xmlsimple.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "lxml",
        "pandas",
        "pyyaml",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Text Processing :: Markup :: XML",
    ],
)
