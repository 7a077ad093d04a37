"""Package setup for site_archiver."""

from setuptools import setup, find_packages

setup(
    name="site-archiver",
    version="1.0.0",
    description="Single-site crawler that archives section text and images "
                "with retrying downloads",
    packages=find_packages(include=["site_archiver", "site_archiver.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "tqdm>=4.66.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-archiver=site_archiver.cli:main",
            "site-archiver-clean=site_archiver.cli:clean_main",
        ],
    },
)
