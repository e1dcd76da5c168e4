"""proxy-conf - deploy-time renderer for the nginx proxy config.

Turns a config template into the file nginx reads at startup: strips
``daemon off;`` and expands ``{{port}}`` / ``{{env "NAME"}}`` style
placeholders from a caller-supplied function table.
"""

try:
    from importlib.metadata import version

    __version__ = version("proxy-conf")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
