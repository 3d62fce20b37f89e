from setuptools import setup, find_packages

setup(
    name="tripdiary",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "python-dotenv",
        "pydantic",
        "pydantic-settings",
        "googlemaps",
        "httpx",
        "langchain-core",
        "langchain-openai",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "tripdiary=tripdiary.main:run",
        ],
    },
    python_requires=">=3.10",
)
