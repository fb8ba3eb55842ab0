"""winprov - Declarative Windows machine provisioning.

Installs packages, links dotfiles into place and purges temporary
directories from a single manifest file.
"""

__version__ = "0.1.0"
