# setup.py - Package configuration for the QUIC TX Blocked State analyzer

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="quic-txblocked",
    version="0.1.0",
    author="CloudClub",
    author_email="example@cloudclub.com",
    description="Classified, duration-weighted analysis of QUIC TX blocked intervals",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["txblocked", "txblocked.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: System :: Networking :: Monitoring",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "txblocked=txblocked.cli:cli",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
