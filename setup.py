from pathlib import Path
from setuptools import find_namespace_packages, setup

ROOT = Path(__file__).parent


def _version() -> str:
    for line in (ROOT / "src" / "privacy_sexy" / "__init__.py").read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("'\"")
    raise RuntimeError("__version__ not found")


setup(
    name="privacy-sexy",
    version=_version(),
    description="Build privacy & security tweak scripts from declarative OS collections",
    url="https://github.com/SubconsciousCompute/privacy-sexy-rs",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["privacy_sexy", "privacy_sexy.*"]),
    install_requires=["PyYAML>=6.0"],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["privacy-sexy=privacy_sexy.cli:main"]},
)
