import runpy

from setuptools import setup

# Read the constants without importing the package and its dependencies.
const = runpy.run_path("optkit/const.py")

setup(
    name="optkit",
    version=const["VERSION_STR"],
    python_requires=">=3.10",
    description=const["DESCRIPTION"],
    packages=["optkit"],
    install_requires=[
        "dataclasses-json",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "optkit = optkit:main",
        ],
    },
    license="MIT",
    platforms="any",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
