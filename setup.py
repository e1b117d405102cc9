from setuptools import setup
from pathlib import Path

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="zoompointer",
    version="1.0.0",
    description="Grid-zoom pointing experiment with Fitts's Law analysis",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["zoompointer", "zoompointer.trial", "zoompointer.analysis"],
    install_requires=[
        "Pillow>=10.1",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "console_scripts": ["zoompointer=zoompointer.cli:main"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
