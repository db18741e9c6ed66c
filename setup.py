"""Setup script for swiftstore-sdk package."""
from setuptools import setup, find_packages

setup(
    name="swiftstore-sdk",
    version="0.1.0",
    description="Async Python SDK for OpenStack Swift with TempAuth and Keystone v2/v3 support",
    long_description=open("README.md").read() if __file__ else "",
    long_description_content_type="text/markdown",
    author="Swiftstore Team",
    license="AGPL-3.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.26.0",
        "pydantic>=2.5.0",
        "tenacity>=8.2.3",
        "typing-extensions>=4.9.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "pytest-asyncio>=0.23.2",
            "pytest-mock>=3.12.0",
            "black>=23.12.0",
            "flake8>=7.0.0",
            "mypy>=1.8.0",
            "isort>=5.13.2",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU Affero General Public License v3",
        "Framework :: AsyncIO",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
