from setuptools import find_packages, setup

extras_require = {}
extras_require["test"] = sorted(
    {
        "pytest",
        "pytest-cov>=2.6.1",  # no_cover support
        "pydocstyle",
        "check-manifest",
        "flake8",
        "flake8-bugbear",
        "flake8-import-order",
        "flake8-print",
        "mypy",
        "types-tabulate",
        "types-PyYAML",
        "typeguard>=2.13.0",
        "black",
    }
)
extras_require["docs"] = sorted(
    {
        "sphinx",
        "sphinx-click",
        "sphinx-copybutton",
        "sphinx-jsonschema",
        "sphinx-rtd-theme",
    }
)

extras_require["develop"] = sorted(
    set(extras_require["test"] + extras_require["docs"] + ["pre-commit", "twine"])
)
extras_require["complete"] = sorted(set(sum(extras_require.values(), [])))

setup(
    name="lhscan",
    version="0.1.0",
    description="likelihoods, likelihood ratios and likelihood intervals over "
    "hypothesis grids",
    license="BSD-3-Clause",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"lhscan": ["schemas/*.json"]},
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
        "pyyaml",
        "jsonschema",
        "click",
        "tabulate>=0.8.1",  # multiline text
        "matplotlib>=3.6",  # layout="constrained" and seaborn-v0_8 styles
    ],
    extras_require=extras_require,
    entry_points={"console_scripts": ["lhscan=lhscan.cli:lhscan"]},
)
