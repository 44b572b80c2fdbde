# setup.py
from setuptools import setup, find_packages

setup(
    name="schemer",
    version="0.3.0",
    description="A small Scheme interpreter with syntax-rules macros and a Python foreign-call bridge",
    packages=find_packages(include=["schemer", "schemer.*"]),
    package_data={"schemer": ["prelude/*.scm"]},
    python_requires=">=3.10",
    extras_require={"test": ["pytest", "hypothesis"]},
    entry_points={"console_scripts": ["schemer=schemer.__main__:main"]},
    zip_safe=False,
)
