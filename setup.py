"""
Fallback setup.py for older pip versions that don't support pyproject.toml
"""
from setuptools import setup, find_packages

setup(
    name="tracescope",
    version="0.1.0",
    packages=find_packages(include=["tracescope", "tracescope.*"]),
    python_requires=">=3.10",
)
