"""FastAPI surface for the webview frontend."""
