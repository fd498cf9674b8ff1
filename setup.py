from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


def read_requirements() -> list[str]:
    requirements_file = Path("requirements.txt")
    if not requirements_file.exists():
        return []
    return [
        line.strip()
        for line in requirements_file.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.startswith("#")
    ]


def build_extras() -> dict[str, list[str]]:
    base: dict[str, set[str]] = {
        "llm": {
            "openai",
        },
        "config": {
            "PyYAML",
        },
        "test": {
            "pytest",
            "PyYAML",
            "openai",
        },
    }

    extras_sets = dict(base)
    full = set().union(base["llm"], base["config"])
    extras_sets["full"] = full
    extras_sets["all"] = full

    return {name: sorted(packages) for name, packages in extras_sets.items()}


setup(
    name="canvas_alt",
    version="0.1.0",
    packages=find_packages(include=["canvas_alt", "canvas_alt.*"]),
    description="Discover canvas images, generate alt text with vision models and write it back",
    long_description=Path("README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require=build_extras(),
    include_package_data=True,
)
