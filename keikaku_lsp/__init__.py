"""Editor integration for keikaku.

- A pygls-based Language Server publishing parse and evaluation errors as
  diagnostics, document symbols for top-level `def` forms and hover text.
"""
