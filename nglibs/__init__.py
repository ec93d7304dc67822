"""
nglibs - Angular library workspace task runner.

Discovers the library projects of a workspace, builds, serves, packs and
publishes them, and keeps angular.json and tsconfig.json in step with the
libraries on disk.

Usage:
    python -m nglibs <command> [libraries] [options]

Commands:
    build         Build libraries once
    build_watch   Build libraries in watch mode
    serve         Build in watch mode and serve the showcase app
    pack          npm pack built libraries
    publish       npm publish built libraries
    pack_publish  npm pack, then publish
    add           Generate new libraries
    remove        Delete libraries
    configs       Resync angular.json and tsconfig.json
"""

from .cli import __version__, main

__all__ = ["__version__", "main"]
