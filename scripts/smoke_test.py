from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from datahub_mcp.core.client import DatahubClient, DatahubClientError
from datahub_mcp.core.models import FieldInput, FieldValueInput, RecordInput
from datahub_mcp.core.tools.databases import (
    create_database,
    delete_database,
    get_database,
    list_databases,
)
from datahub_mcp.core.tools.fields import list_database_fields
from datahub_mcp.core.tools.records import (
    create_database_records,
    delete_database_record,
    list_database_records,
    update_database_record,
)
from datahub_mcp.core.tools.spaces import list_spaces


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val else default


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    # --- Config ---
    token = os.getenv("WRIKE_TOKEN")
    host = _env("WRIKE_HOST", "www.wrike.com")
    if not token:
        return _fail("Missing WRIKE_TOKEN.")

    cfg_folder_id = _env("TEST_PARENT_FOLDER_ID")
    cleanup = _env("SMOKE_TEST_CLEANUP", "1") == "1"

    print("Config:")
    print(f"  host: {host}")
    print(f"  parent_folder_id: {cfg_folder_id}")
    print(f"  cleanup: {cleanup}")

    client = DatahubClient(token=token, host=host)

    async with client:
        # --- List spaces ---
        _print_step("List spaces")
        spaces = await list_spaces(client)
        for space in spaces:
            print(f"  {space.root_folder_id} {space.type:<7} {space.title}")
        if not spaces and not cfg_folder_id:
            return _fail("No spaces available and TEST_PARENT_FOLDER_ID not set.")

        parent_folder_id = cfg_folder_id or spaces[0].root_folder_id
        print(f"Parent folder: {parent_folder_id}")

        # --- Create database ---
        _print_step("Create database")
        stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        title = f"Smoke Test {stamp}"
        try:
            created = await create_database(
                client,
                title=title,
                parent_folder_id=parent_folder_id,
                database_record_name="Item",
                fields=[
                    FieldInput(title="Amount", type="number"),
                    FieldInput(title="Done", type="checkbox"),
                ],
            )
        except DatahubClientError as exc:
            return _fail(f"Create failed: {exc}")

        database_id = created["database"].get("id")
        if not database_id:
            return _fail("Create did not return a database id.")
        field_ids = [f.get("id") for f in created["fields"]]
        print(f"Created {database_id} with fields {field_ids}")

        # --- Verify database ---
        _print_step("Verify database")
        database = await get_database(client, database_id)
        print(f"  title={database.title!r} records={database.record_count}")
        found = await list_databases(client, name_contains=title)
        if not any(d.database_id == database_id for d in found):
            return _fail("New database not returned by list_databases.")
        fields = await list_database_fields(client, database_id)
        print(f"  fields: {[f.get('title') for f in fields.get('data', [])]}")

        # --- Records ---
        _print_step("Records")
        records = await create_database_records(
            client,
            database_id,
            [
                RecordInput(
                    title="First",
                    fields=[FieldValueInput(field_id=field_ids[0], value=42)],
                )
            ],
        )
        record_id = records[0].get("id")
        print(f"Created record {record_id}")

        await update_database_record(
            client,
            database_id,
            record_id,
            fields=[FieldValueInput(field_id=field_ids[1], value=True)],
        )
        listed = await list_database_records(client, database_id, limit=10)
        print(f"  listed {len(listed.get('data', []))} record(s)")
        await delete_database_record(client, database_id, record_id)
        print("Deleted record")

        # --- Cleanup (optional) ---
        _print_step("Cleanup")
        if cleanup:
            await delete_database(client, database_id)
            print(f"Deleted {database_id}")
        else:
            print(f"Cleanup skipped (SMOKE_TEST_CLEANUP=0). Kept {database_id}.")

    print("\nPASSED smoke test.")
    return 0


def main() -> None:
    exit_code = asyncio.run(run_smoke_test())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
