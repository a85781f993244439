"""
RouteForge CLI.

The `routeforge` command-line interface for inspecting route tables.

Usage:
    routeforge -c routes.yaml routes
    routeforge -c routes.yaml match GET /users/42
    routeforge -c routes.yaml build user -p id=42
    routeforge -c routes.yaml bundle
    routeforge inspect "/articles(/<year>)"
"""

__version__ = "0.1.0"
__cli_name__ = "routeforge"


def main():
    """Wrapper to avoid eager import of __main__ which causes warnings with -m."""
    from .__main__ import main as _main
    return _main()
