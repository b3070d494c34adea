from pathlib import Path
from setuptools import setup, find_packages


project_name = "pyshrdlite"

install_requires = [
    "astar",
    "PyYAML",
]

# This will gracefully fall back to an empty string if the README.md cannot be read.
readme_path = Path(__file__).parent / "README.md"
readme_text = readme_path.read_text() if readme_path.exists() else ""

setup(
    name=project_name,
    version="0.1.0",
    description="Natural language controlled robot arm planner for block worlds.",
    long_description=readme_text,
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.10",
    install_requires=install_requires,
    packages=find_packages(include=[project_name, f"{project_name}.*"]),
    package_data={project_name: ["data/*.yaml"]},
    extras_require={"test": ["pytest"]},
    zip_safe=True,
)
