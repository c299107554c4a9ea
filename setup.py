"""
Setup script for the Todoboard service.
"""
from setuptools import setup, find_packages

setup(
    name="todoboard",
    version="0.1.0",
    packages=find_packages(include=["todoboard", "todoboard.*"]),
    install_requires=[
        "fastapi>=0.110.0",
        "starlette>=0.36.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "SQLAlchemy>=2.0.0",
        "passlib>=1.7.4",
        "PyJWT>=2.8.0",
        "click>=8.1.0",
        "httpx>=0.25.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "todoboard=todoboard.__main__:main",
        ],
    },
    python_requires=">=3.11",
)
