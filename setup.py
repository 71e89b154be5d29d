import os

from setuptools import find_packages, setup

# mypyc compilation of the arithmetic core is opt-in: USE_MYPYC=1 pip install .
#   The pure-python package is functionally identical, just slower.
ext_modules = []
if os.environ.get("USE_MYPYC") == "1":
    from mypyc.build import mypycify

    ext_modules = mypycify([
        "zetacore/rational.py",
        "zetacore/bigint.py",
    ])

setup(
    name="zetacore",
    version="0.1.0",
    description="Exact rationals, big-integer limbs, and number-theoretic algorithms",
    packages=find_packages(include=["zetacore", "zetacore.*"]),
    python_requires=">=3.9",
    install_requires=["sympy"],
    extras_require={"test": ["pytest"]},
    ext_modules=ext_modules,

    license="MIT",
)
