"""Setup script for the reference manager package."""
from setuptools import setup, find_packages

setup(
    name="bibmanager",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "bibmanager=bibmanager.__main__:main",
        ],
    },
    python_requires=">=3.8",
    description="A terminal tool for managing references, projects and citation exports",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="reference citation academic bibliography biblatex",
    include_package_data=True,
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Text Processing :: Markup",
    ],
)
