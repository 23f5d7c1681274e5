from datahub_mcp.core.graph import (
    derive_record_name,
    extract_database,
    extract_databases,
    extract_spaces,
    reference_count,
    reference_nodes,
    root_object,
)


def _objects(root_id, node):
    return {"data": {"objects": {root_id: node}}}


def test_root_object_tolerates_missing_structure():
    assert root_object({}, "x") is None
    assert root_object({"data": None}, "x") is None
    assert root_object({"data": {"objects": {}}}, "x") is None
    assert root_object(_objects("x", {"a": 1}), "x") == {"a": 1}


def test_reference_nodes_accepts_list_or_mapping():
    node = {
        "as_list": [{"a": 1}, "junk", {"a": 2}],
        "as_map": {"k1": {"a": 3}, "k2": {"a": 4}},
        "scalar": 5,
    }
    assert reference_nodes(node, "as_list") == [{"a": 1}, {"a": 2}]
    assert reference_nodes(node, "as_map") == [{"a": 3}, {"a": 4}]
    assert reference_nodes(node, "scalar") == []
    assert reference_nodes(node, "missing") == []


def test_reference_count():
    assert reference_count({"r": [1, 2, 3]}, "r") == 3
    assert reference_count({"r": {"a": 1}}, "r") == 1
    assert reference_count({}, "r") == 0


def test_extract_spaces_without_root_folders_is_empty():
    assert extract_spaces(_objects("d:query:root", {})) == []
    assert extract_spaces({"data": {"objects": {}}}) == []


def test_extract_spaces_converts_folder_ids():
    payload = _objects(
        "d:query:root",
        {
            "s:reference:rootFolders": [
                {
                    "s:property:id": "w2:mod:1",
                    "s:reference:space": {
                        "s:property:name": "Marketing",
                        "s:property:spaceType": "Public",
                        "s:property:rootFolderId": "w2:mod:100",
                    },
                },
                {"s:property:id": "w2:mod:2"},
                {
                    "s:property:id": "w2:mod:3",
                    "s:reference:space": {
                        "s:property:name": "Mine",
                        "s:property:spaceType": "Private",
                        "s:property:rootFolderId": "w2:mod:300",
                    },
                },
            ]
        },
    )

    spaces = extract_spaces(payload)

    assert [(s.root_folder_id, s.title, s.type) for s in spaces] == [
        ("FO100", "Marketing", "Public"),
        ("FO300", "Mine", "Private"),
    ]


def test_extract_databases_maps_ids():
    payload = _objects(
        "s:xsrc:wdh",
        {
            "s:reference:externalTypes": [
                {
                    "s:property:id": "w2:mod:55",
                    "s:property:name": "Inventory",
                    "s:property:parentId": "w2:mod:9",
                    "s:property:rootId": "w2:mod:100",
                }
            ]
        },
    )

    (database,) = extract_databases(payload)
    assert database.database_id == "DB55"
    assert database.title == "Inventory"
    assert database.root_folder_id == "FO100"
    assert database.record_count is None


def test_extract_databases_missing_reference_is_empty():
    assert extract_databases(_objects("s:xsrc:wdh", {})) == []


def test_derive_record_name():
    assert derive_record_name({"customNames": {"singular": "Task"}}) == "Task"
    assert (
        derive_record_name({"customNames": {"singular": "Task"}, "name": "w2:Other"})
        == "Task"
    )
    assert derive_record_name({"name": "w2:Widget"}) == "Widget"
    assert derive_record_name({"name": "w2:widget"}) == "Widget"
    assert derive_record_name({"customNames": {}, "name": "w2:item"}) == "Item"
    assert derive_record_name({"name": "w2:"}) is None
    assert derive_record_name({}) is None
    assert derive_record_name(None) is None


def test_extract_database_counts_data_items():
    node = {
        "s:property:name": "CRM",
        "s:property:rootId": "w2:mod:100",
        "s:property:listItemsTypeName": {"name": "w2:contact"},
        "s:reference:dataItems": [{"s:property:id": "a"}, {"s:property:id": "b"}],
    }

    database = extract_database(_objects("w2:mod:7", node), "w2:mod:7", "DB7")

    assert database is not None
    assert database.database_id == "DB7"
    assert database.title == "CRM"
    assert database.root_folder_id == "FO100"
    assert database.database_record_name == "Contact"
    assert database.record_count == 2


def test_extract_database_defaults_and_not_found():
    node = {"s:property:name": "Empty", "s:property:rootId": "w2:mod:1"}
    database = extract_database(_objects("w2:mod:7", node), "w2:mod:7", "DB7")
    assert database.record_count == 0
    assert database.database_record_name is None

    assert extract_database(_objects("w2:mod:8", node), "w2:mod:7", "DB7") is None


def test_extract_spaces_keeps_space_without_known_type():
    payload = _objects(
        "d:query:root",
        {
            "s:reference:rootFolders": [
                {
                    "s:property:id": "w2:mod:4",
                    "s:reference:space": {
                        "s:property:name": "Legacy",
                        "s:property:rootFolderId": "w2:mod:400",
                    },
                },
                {
                    "s:property:id": "w2:mod:5",
                    "s:reference:space": {
                        "s:property:name": "Partners",
                        "s:property:spaceType": "Shared",
                        "s:property:rootFolderId": "w2:mod:500",
                    },
                },
            ]
        },
    )

    spaces = extract_spaces(payload)

    assert [(s.root_folder_id, s.title, s.type) for s in spaces] == [
        ("FO400", "Legacy", None),
        ("FO500", "Partners", "Shared"),
    ]
    assert spaces[0].model_dump(by_alias=True, exclude_none=True) == {
        "rootFolderId": "FO400",
        "title": "Legacy",
    }
