# setup.py
from setuptools import setup, find_packages

setup(
    name="tree_scout",
    version="0.1.0",
    description="Asynchronous crawler building a markdown checklist of repository files",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"tree_scout.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["tree-scout=tree_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
