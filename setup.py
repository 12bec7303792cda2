"""
Setup script for html-pdf-service project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="html-pdf-service",
    version="1.0.0",
    packages=find_packages(include=["html_pdf_service", "html_pdf_service.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "pydantic-settings",
        "playwright",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "html-pdf-service=html_pdf_service.__main__:main",
        ],
    },
)
