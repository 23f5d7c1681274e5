from datahub_mcp.server import run

run()
