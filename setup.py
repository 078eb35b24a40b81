"""Setup script for the broodscan package."""

from setuptools import find_packages, setup

setup(
    name="broodscan",
    version="0.1.0",
    description="BroodMinder BLE advertisement scanner and decoder",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyyaml",
        "python-dotenv",
        "bleak",
        "rich",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-asyncio",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "broodscan=broodscan.scanner:main",
        ],
    },
)
