"""
Terminal user interface.

- cli: argparse entry point for account and session commands
- dashboard: Textual dashboard app
- components: Panels used by the dashboard
"""
