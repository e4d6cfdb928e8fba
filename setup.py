from setuptools import setup, find_packages

setup(
    name="storyvote",
    version="0.1.0",
    description="Collaborative storytelling API: vote on phrases that become video episodes",
    packages=find_packages(include=["storyvote", "storyvote.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy[asyncio]>=2.0",
        "aiosqlite",
        "asyncpg",
        "pydantic>=2",
        "pydantic-settings",
        "python-dotenv",
        "tzdata",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "pytest-cov",
            "httpx",
        ],
    },
)
