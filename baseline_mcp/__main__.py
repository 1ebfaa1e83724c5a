from baseline_mcp.cli import cli

cli()
