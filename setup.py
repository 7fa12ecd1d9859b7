from setuptools import setup, find_namespace_packages
import os

install_requires = ["pydantic>=2"]

# Define optional dependencies for development
extras_require = {"dev": ["pytest"]}

setup(
    name="loxwalk",
    version="0.1.0",
    packages=find_namespace_packages(where=".", include=["loxwalk", "loxwalk.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "loxwalk = loxwalk.cli:main",
        ],
    },
    include_package_data=True,
    package_data={},
    description="A tree-walking interpreter for a small C-like scripting language, with multi-error syntax diagnostics.",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
