"""Setup configuration for versefill."""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="versefill",
    version="1.0.0",
    description="Live scripture citation detection and inline expansion for text fields",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Religion",
        "Topic :: Text Processing :: Linguistic",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        # Core dependencies
        "python-dotenv>=1.0.0",
        "requests>=2.31.0",
        # Verse markup cleanup (bolls.life resolver)
        "beautifulsoup4>=4.11.0",
    ],
    extras_require={
        "dev": [
            # Development dependencies
            "pytest>=7.0.0",
            "black>=22.0.0",
            "mypy>=0.990",
            "flake8>=5.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "versefill=versefill.cli:main",
        ],
    },
)
