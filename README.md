# typelib

`typelib` keeps a database of type layouts: a fixed set of builtin types
(integers, floating-point types and pointers) and any number of struct types
described by their extent, member offsets, member types and array sizes. The
database can be saved to and loaded from a YAML type file.

It is a library only: there is no command to run.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Type identifiers

Ids `0` to `10` are the builtin types, listed in `typelib.typedb.BuiltinType`:

| id | name           | size |
|----|----------------|------|
| 0  | `int8`         | 1    |
| 1  | `int16`        | 2    |
| 2  | `int32`        | 4    |
| 3  | `int64`        | 8    |
| 4  | `half`         | 2    |
| 5  | `float`        | 4    |
| 6  | `double`       | 8    |
| 7  | `float128`     | 16   |
| 8  | `x86_float80`  | 16   |
| 9  | `ppc_float128` | 16   |
| 10 | `pointer`      | size of a native pointer on the running platform |

Ids below 256 are reserved (`BuiltinType.NUM_RESERVED_IDS`); 255 is
`BuiltinType.UNKNOWN_TYPE`. Struct types use ids from 256 upwards.
`StructFlags.USER_DEF` and `StructFlags.VEC` mark a struct as user defined or
as a vector type.

## Using the database

```python
from typelib.typedb import BuiltinType, StructFlags, StructTypeInfo, TypeDB

db = TypeDB()
db.register_struct(
    StructTypeInfo(
        id=256,
        name="struct.s2_t",
        extent=16,
        num_members=3,
        offsets=[0, 4, 8],
        member_types=[BuiltinType.INT32, BuiltinType.INT8, BuiltinType.INT64],
        array_sizes=[1, 1, 1],
        flags=StructFlags.USER_DEF,
    )
)

db.get_type_name(256)                 # "struct.s2_t"
db.get_type_size(256)                 # 16
db.get_type_name(BuiltinType.DOUBLE)  # "double"
db.get_type_size(BuiltinType.INT64)   # 8
db.is_struct_type(256)                # True
db.is_user_defined_type(256)          # True
db.is_vector_type(256)                # False
db.get_struct_info(256)               # the StructTypeInfo above
db.struct_list()                      # registered structs, in registration order
db.get_type_name(300)                 # "UnknownStruct"
db.get_type_size(300)                 # 0
```

`TypeDB` methods:

- `is_builtin_type(id)`: id is in `0..10`.
- `is_reserved_type(id)`: id is in `0..255`.
- `is_struct_type(id)`: id is 256 or more (whether registered or not).
- `is_valid(id)`: a builtin id or a registered struct id.
- `is_user_defined_type(id)`, `is_vector_type(id)`: the registered struct
  has the corresponding flag set; `False` for anything not registered.
- `get_type_name(id)`: builtin name, struct name, or `"UnknownStruct"` for
  any other id.
- `get_type_size(id)`: builtin size, struct extent, or `0` for reserved
  non-builtin ids and unregistered ids.
- `get_struct_info(id)`: the `StructTypeInfo`, or `None`.
- `struct_list()`: a new list of the registered structs.
- `clear()`: remove every registered struct.

Registering an id that is reserved or already taken makes `register_struct`
raise `TypeRegistrationError` (a `ValueError`) and leaves the database
unchanged.

## Type files

`typelib.typeio.TypeIO` loads a type file into a `TypeDB` and stores one back
out:

```python
from typelib.typedb import TypeDB
from typelib.typeio import TypeIO

db = TypeDB()
io = TypeIO(db)
io.load("types.yaml")
io.store("copy.yaml")
```

A type file is a YAML list of structs; `store` writes it like this:

```yaml
---
- id:              256
  name:            struct.s_t
  extent:          4
  member_count:    1
  offsets:         [ 0 ]
  types:           [ 2 ]
  sizes:           [ 1 ]
  flags:           1
...
```

Every entry must have exactly these eight keys. `id`, `extent`,
`member_count` and `flags` are integers, `extent` and `member_count` not
negative; `offsets`, `types` and `sizes` are lists of integers, with
`offsets` and `sizes` not negative. An empty file holds no structs.

`load` reads the file, empties the database and then registers each struct in
it. A struct whose id is reserved or already taken by an earlier entry is
skipped and a warning is logged. If the file cannot be read, `load` raises
`TypeFileError` and leaves the database as it was; if the file is not a valid
type file, it raises `TypeFileError` after the database has been emptied.

`store` writes every registered struct and raises `TypeFileError` if the file
cannot be written.

`parse_structs(text)` and `dump_structs(structs)` convert between this text
and lists of `StructTypeInfo` without touching the file system.

## What it does not do

`typelib` does not inspect programs or compute struct layouts. Ids, extents,
offsets, member types and array sizes must be supplied by the caller or read
from an existing type file.