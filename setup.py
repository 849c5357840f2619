# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dupedir",
    version="0.1.0",
    description="Find directories that are likely duplicates by comparing the file names they contain",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dupedir", "dupedir.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'dupedir=dupedir.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
