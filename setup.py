from setuptools import setup, find_packages

setup(
    name="safetrade",
    version="0.1",
    python_requires=">=3.11",
    packages=find_packages(exclude=["tests", "tests.*", "alembic", "alembic.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<5",  # passlib backend self-test fails on bcrypt 5
        "pydantic[email]",
        "pydantic-settings",
        "python-dotenv",
        "alembic",
        "httpx",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
