"""Setup script for prdash package."""

from setuptools import find_packages, setup

setup(
    name="prdash",
    version="0.1.0",
    description="Terminal dashboard for your GitHub pull requests",
    packages=find_packages(include=["prdash", "prdash.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "rich>=13.0",
        "textual>=0.86",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "prdash=prdash.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
