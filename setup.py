from setuptools import setup, find_packages

setup(
    name="roofedge",
    version="0.1.0",
    packages=find_packages(include=["roofedge", "roofedge.*"]),
    install_requires=[
        "geopandas",
        "pandas",
        "numpy",
        "shapely",
        "lxml",
        "pyyaml",
        "click",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "roofedge-tiles=roofedge.cli.run_tiles:run_tiles",
        ],
    },
    python_requires=">=3.8",
)
