from setuptools import setup, find_packages

setup(
    name="pharmacy_reference_api",
    version="1.0.0",
    packages=find_packages(include=["pharmacy_api", "pharmacy_api.*"]),
    package_data={"pharmacy_api": ["locales/*.json"]},
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "python-dotenv",
        "httpx",
    ],
    extras_require={
        "test": [
            "pytest",
            "anyio",
        ],
    },
)
