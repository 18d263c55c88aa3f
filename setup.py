# setup.py
from setuptools import setup, find_packages

setup(
    name="gofinances",
    version="0.1.0",
    description="Local personal-finance tracker: register transactions, view dashboards and category summaries",
    packages=find_packages(include=["gofinances", "gofinances.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "python-dotenv>=0.19",
        "anyio>=3.0",
        "mcp>=1.0,<2",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "gofinances=gofinances.cli:main",
            "gofinances-mcp=gofinances.mcp_server:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
