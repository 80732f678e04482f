"""Setup configuration for api-clients"""
from setuptools import setup, find_packages

setup(
    name="api-clients",
    version="0.1.0",
    description="Database and cache clients with linear reconnect backoff",
    packages=find_packages(include=["api_clients", "api_clients.*"]),
    install_requires=[
        "click>=8.1.7",
        "python-dotenv>=1.0.0",
        "sqlalchemy[asyncio]>=2.0.25",
        "asyncpg>=0.29.0",
        "psycopg2-binary>=2.9.9",
        "redis>=5.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "api-clients=api_clients.cli:cli",
        ],
    },
    python_requires=">=3.9",
)
