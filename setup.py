# setup.py
from setuptools import setup, find_packages

setup(
    name="mdrowser",
    version="0.1.0",
    description="Fetch a web page and read it as markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.1",
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "aiohttp>=3.8",
        ],
    },
    entry_points={
        "console_scripts": [
            "mdrowser=mdrowser.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
