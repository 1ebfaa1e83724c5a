from baseline_mcp.app import create_app

app = create_app()
