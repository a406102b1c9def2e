import os

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))

# Long description comes from the design notes when they ship with the sdist
long_description = ""
if os.path.exists(os.path.join(here, "DESIGN.md")):
    with open(os.path.join(here, "DESIGN.md"), encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="chainseq",
    version="0.1.0",
    description="Ordered sequences with a chainable functional API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "tools"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
)
