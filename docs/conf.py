"""Sphinx configuration for the uniconv documentation."""

import uniconv

project = "uniconv"
copyright = "2026, uniconv contributors"
author = "uniconv contributors"
release = uniconv.__version__
version = ".".join(release.split(".")[:2])

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx_copybutton",
]

exclude_patterns = ["_build"]

html_theme = "furo"
html_title = f"uniconv {release}"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}

autodoc_member_order = "bysource"
autodoc_typehints = "description"
copybutton_prompt_text = "$ "
