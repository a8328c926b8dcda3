# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------
import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))
# heyoka wheels are heavy; autodoc only needs the signatures
autodoc_mock_imports = ['heyoka']

# -- Project information -----------------------------------------------------

project = 'Orrery'
copyright = '2026, Orrery developers'
author = 'Orrery developers'
release = '0.1.0'

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',      # API pages from docstrings
    'sphinx.ext.napoleon',     # NumPy-style Parameters/Returns sections
    'sphinx.ext.autosummary',
    'sphinx.ext.mathjax',      # Kepler's equation in the solver docs
    'myst_parser',             # index.md
]

autosummary_generate = True
autodoc_member_order = 'bysource'
templates_path = []
exclude_patterns = []

# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
html_static_path = []
