# Configuration file for the Sphinx documentation builder.

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pyunv import __version__  # noqa: E402

project = "PyUNV"
copyright = "2026, Melek Derman"
author = "Melek Derman"
release = __version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "myst_parser",
]

root_doc = "index"
exclude_patterns = ["_build"]

html_theme = "sphinx_rtd_theme"
html_title = f"PyUNV {release}"

# numpy-style docstrings throughout
autodoc_member_order = "bysource"
autodoc_typehints = "none"
autodoc_mock_imports = ["h5py"]
napoleon_numpy_docstring = True
napoleon_google_docstring = False

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "h5py": ("https://docs.h5py.org/en/stable/", None),
}

# MyST-Parser settings: pages are Markdown, API pages use eval-rst blocks
source_suffix = {".md": "markdown"}
myst_heading_anchors = 2
