from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="handlr",
    version="0.1.0",
    author="Tim Hosking",
    author_email="github.com/Munger",
    description="Manage and use default applications through mimeapps.list",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Munger/handlr",
    project_urls={
        "Bug Tracker": "https://github.com/Munger/handlr/issues",
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Environment :: Console",
        "Topic :: Desktop Environment",
        "Topic :: Utilities",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "pyxdg>=0.26",
        "tomli;python_version<'3.11'",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "handlr=handlr.cli:main",
        ],
    },
)
