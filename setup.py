from setuptools import setup, find_packages

setup(
    name="query_wire",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.0",
        "uvicorn",
        "fastapi",
        "httpx>=0.27.0",
        "protobuf>=5.26",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires='>=3.11',
)
