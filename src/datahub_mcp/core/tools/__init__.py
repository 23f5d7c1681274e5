"""
DataHub tool operations.

Every public coroutine here whose first parameter is ``client`` is exposed as an
MCP tool named ``datahub_<function name>``.
"""
