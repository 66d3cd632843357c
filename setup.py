from pathlib import Path
import re

from setuptools import find_packages
from setuptools import setup


HERE = Path(__file__).resolve().parent


def get_version():
    match = re.search(r'^__version__ = version = "([^"]+)"', (HERE / "mongotrace" / "_version.py").read_text(), re.M)
    return match.group(1)


setup(
    name="mongotrace",
    version=get_version(),
    description="OpenTelemetry tracing for callback based MongoDB drivers",
    long_description=(HERE / "README.md").read_text() if (HERE / "README.md").exists() else "",
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    packages=find_packages(exclude=["tests*"]),
    python_requires=">=3.8",
    install_requires=[
        "opentelemetry-api>=1.15",
        "packaging>=17.1",
        "wrapt>=1.14",
    ],
    extras_require={
        "test": [
            "mock",
            "opentelemetry-sdk>=1.15",
            "pytest",
            "riot",
        ],
    },
    zip_safe=False,
)
