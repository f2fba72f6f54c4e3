"""
Setup script for the LINE embedding training package.
"""

from setuptools import setup, find_packages

setup(
    name="line_embedding",
    version="1.0.0",
    description="LINE: large-scale information network embedding with asynchronous multi-threaded SGD",
    author="LINE Embedding Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"config": ["*.yaml"]},
    python_requires=">=3.8",
    install_requires=[
        "torch>=2.0.0",
        "networkx>=3.0",
        "numpy>=1.23.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "line-train=scripts.train:main",
            "line-reconstruct=scripts.reconstruct:main",
            "line-postprocess=scripts.postprocess:main",
        ],
    },
)
