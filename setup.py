"""Setup configuration for rdr-install-config"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = ""
if readme_file.exists():
    long_description = readme_file.read_text()

setup(
    name="rdr-install-config",
    version="1.0.0",
    description="Resolve OpenShift Regional-DR managed cluster install_configs from layered Helm values",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "rdr_resolver": ["files/*.json", "files/*.yaml"],
    },
    python_requires=">=3.8",
    install_requires=[
        "PyYAML>=6.0",
        "coloredlogs>=15.0",
        "packaging>=21.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "rdr-install-config=rdr_resolver.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Systems Administration",
        "Topic :: Utilities",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    keywords="openshift regional-dr install-config helm gitops",
)
