from setuptools import find_packages, setup

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="tabgen",
    version="0.1.0",
    description="Shell completion scripts for bash, zsh, and fish, from a command tree",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"tabgen": ["py.typed"]},
    python_requires=">=3.8",
    install_requires=[
        "docstring_parser",
        "typing_extensions>=4.1.0",
        "pyyaml",
        "termcolor",
        "shtab",
    ],
    extras_require={
        "testing": [
            "pytest",
            "pytest-cov",
        ],
        "type-checking": [
            "mypy",
            "types-PyYAML",
        ],
    },
    entry_points={"console_scripts": ["tabgen = tabgen.main:main"]},
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
