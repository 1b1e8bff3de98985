from setuptools import find_packages, setup

setup(
    name="netstorage-client",
    version="0.1.0",
    description="Client for the Akamai NetStorage HTTP API with request signing",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests>=2.28.0",
        "urllib3>=1.26",
    ],
    entry_points={
        "console_scripts": [
            "netstorage=netstorage_client.__main__:main",
        ],
    },
    python_requires=">=3.10",
    extras_require={
        "dev": [
            "pytest",
            "build",
            "twine",
        ],
    },
)
