from setuptools import setup, find_packages

setup(
    name="connect4net",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["run"],
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
