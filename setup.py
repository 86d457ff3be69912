"""
Setup script for the form encoder.
"""
from setuptools import setup, find_packages

setup(
    name="form-encoder",
    version="1.0.0",
    description="Encode typed Python values as flat, reversible application/x-www-form-urlencoded forms",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "python-dotenv>=1.0.0",
        "tqdm>=4.66.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    python_requires=">=3.8",
)
