import pytest

from typelib.typedb import StructTypeInfo, TypeDB
from typelib.typeio import TypeFileError, TypeIO, dump_structs, parse_structs

SIMPLE = """\
---
- id:              256
  name:            struct.s_t
  extent:          4
  member_count:    1
  offsets:         [ 0 ]
  types:           [ 2 ]
  sizes:           [ 1 ]
  flags:           1
- id:              257
  name:            struct.s2_t
  extent:          16
  member_count:    3
  offsets:         [ 0, 4, 8 ]
  types:           [ 2, 0, 3 ]
  sizes:           [ 1, 1, 1 ]
  flags:           1
- id:              258
  name:            struct.s3_t
  extent:          64
  member_count:    6
  offsets:         [ 0, 16, 32, 36, 48, 56 ]
  types:           [ 2, 3, 0, 2, 0, 3 ]
  sizes:           [ 3, 2, 1, 3, 5, 1 ]
  flags:           1
- id:              259
  name:            struct.s4_t
  extent:          64
  member_count:    4
  offsets:         [ 0, 8, 32, 56 ]
  types:           [ 2, 6, 6, 10 ]
  sizes:           [ 1, 3, 3, 1 ]
  flags:           1
...
"""

RECURSIVE = """\
---
- id:              256
  name:            struct.s1_t
  extent:          16
  member_count:    2
  offsets:         [ 0, 8 ]
  types:           [ 0, 10 ]
  sizes:           [ 3, 1 ]
  flags:           1
- id:              257
  name:            struct.s2_t
  extent:          32
  member_count:    3
  offsets:         [ 0, 16, 24 ]
  types:           [ 256, 10, 10 ]
  sizes:           [ 1, 1, 1 ]
  flags:           1
- id:              258
  name:            struct.s3_t
  extent:          64
  member_count:    3
  offsets:         [ 0, 32, 40 ]
  types:           [ 256, 0, 10 ]
  sizes:           [ 2, 1, 3 ]
  flags:           1
...
"""


def test_parse_simple_structs():
    structs = parse_structs(SIMPLE)
    assert [s.name for s in structs] == [
        "struct.s_t",
        "struct.s2_t",
        "struct.s3_t",
        "struct.s4_t",
    ]
    s3 = structs[2]
    assert s3.extent == 64
    assert s3.num_members == 6
    assert s3.offsets == [0, 16, 32, 36, 48, 56]
    assert s3.member_types == [2, 3, 0, 2, 0, 3]
    assert s3.array_sizes == [3, 2, 1, 3, 5, 1]


def test_dump_matches_expected_format():
    assert dump_structs(parse_structs(SIMPLE)) == SIMPLE
    assert dump_structs(parse_structs(RECURSIVE)) == RECURSIVE


def test_dump_empty():
    assert dump_structs([]) == "---\n...\n"
    assert parse_structs("---\n...\n") == []


def test_load_recursive_file(tmp_path):
    path = tmp_path / "types.yaml"
    path.write_text(RECURSIVE)
    db = TypeDB()
    TypeIO(db).load(path)
    assert db.get_type_name(257) == "struct.s2_t"
    assert db.get_type_size(257) == 32
    assert db.get_struct_info(258).member_types == [256, 0, 10]
    assert db.get_type_name(db.get_struct_info(257).member_types[0]) == "struct.s1_t"


def test_store_load_round_trip(tmp_path):
    db = TypeDB()
    db.register_struct(StructTypeInfo(256, "struct.s_t", 4, 1, [0], [2], [1], 1))
    db.register_struct(StructTypeInfo(300, "weird: name", 0, 0, [], [], [], 2))
    path = tmp_path / "out.yaml"
    TypeIO(db).store(path)
    other = TypeDB()
    TypeIO(other).load(path)
    assert other.struct_list() == db.struct_list()


def test_load_replaces_existing_contents(tmp_path):
    path = tmp_path / "types.yaml"
    path.write_text(RECURSIVE)
    db = TypeDB()
    db.register_struct(StructTypeInfo(999, "old", 1, 0, [], [], [], 0))
    TypeIO(db).load(path)
    assert db.get_struct_info(999) is None
    assert len(db.struct_list()) == 3


def test_load_skips_conflicting_ids(tmp_path):
    text = SIMPLE.replace("id:              257", "id:              256")
    path = tmp_path / "types.yaml"
    path.write_text(text)
    db = TypeDB()
    TypeIO(db).load(path)
    assert [s.id for s in db.struct_list()] == [256, 258, 259]
    assert db.get_type_name(256) == "struct.s_t"


def test_missing_required_key():
    text = "- id: 256\n  name: x\n  extent: 4\n"
    with pytest.raises(TypeFileError, match="member_count"):
        parse_structs(text)


def test_unknown_key_rejected():
    text = SIMPLE.replace("  flags:           1\n...", "  flags:           1\n  extra: 3\n...")
    with pytest.raises(TypeFileError, match="extra"):
        parse_structs(text)


def test_bad_list_value():
    text = SIMPLE.replace("[ 0, 4, 8 ]", "[ 0, a, 8 ]")
    with pytest.raises(TypeFileError, match="offsets"):
        parse_structs(text)


def test_not_a_sequence():
    with pytest.raises(TypeFileError):
        parse_structs("id: 3\n")


def test_malformed_yaml():
    with pytest.raises(TypeFileError):
        parse_structs("- [ unclosed\n")


def test_load_missing_file(tmp_path):
    db = TypeDB()
    db.register_struct(StructTypeInfo(256, "kept", 1, 0, [], [], [], 0))
    with pytest.raises(TypeFileError):
        TypeIO(db).load(tmp_path / "nope.yaml")
    assert db.get_type_name(256) == "kept"


def test_store_to_bad_path(tmp_path):
    with pytest.raises(TypeFileError, match="storing"):
        TypeIO(TypeDB()).store(tmp_path / "missing_dir" / "out.yaml")