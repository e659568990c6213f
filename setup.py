# setup.py
from setuptools import setup, find_packages

setup(
    name="provider-schema",           # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),  # will find provider_schema/
    install_requires=["pandas", "PyYAML"],
    python_requires=">=3.9",
    entry_points={
        "console_scripts": ["provider-schema=provider_schema.cli:main"],
    },
    description="Composable structural validators and the component provider-definition schema",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
