"""Sphinx configuration for densesparse documentation."""

from importlib.metadata import version as get_version

# -- Project information -----------------------------------------------------
project = 'densesparse'
copyright = '2025, Anansi Development'
author = 'Anansi Development'
release = get_version('densesparse')

# -- General configuration ---------------------------------------------------
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
]

templates_path = ['_templates']
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

# -- Options for HTML output -------------------------------------------------
html_theme = 'sphinx_rtd_theme'

# -- Intersphinx configuration -----------------------------------------------
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
}

# -- Autodoc configuration ---------------------------------------------------
# Private helpers in densesparse._base stay out of the generated pages
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'special-members': '__init__, __getitem__, __iter__',
    'undoc-members': True,
    'exclude-members': '__weakref__'
}
