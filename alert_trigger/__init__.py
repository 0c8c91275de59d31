# alert-trigger - Main Package
"""
Manually trigger a test alert against an Alertmanager-compatible API.

- builder.py: Renders the POST /api/v2/alerts body
- tools/alertmanager_client.py: Sends it over HTTP(S)
- cli.py: The create-alert command
"""

__version__ = "0.1.0"
