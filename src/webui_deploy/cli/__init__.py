"""Command line interface for webui-deploy."""
