import lhscan

project = "lhscan"
author = "lhscan developers"
copyright = f"2026, {author}"
version = lhscan.__version__
release = version

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_rtd_theme",
    "sphinx_copybutton",
    "sphinx-jsonschema",  # config.rst
    "sphinx_click",  # cli.rst
]

master_doc = "index"
autodoc_member_order = "bysource"
napoleon_google_docstring = True
napoleon_numpy_docstring = False

html_theme = "sphinx_rtd_theme"
