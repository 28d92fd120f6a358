# jsonpatchkit

JSON Pointer, JSON Patch and JSON Merge Patch for the data you get from
`json.loads`: dicts, lists, strings, numbers, booleans and `None`.

## Installing

```
pip install jsonpatchkit
```

## JSON Pointer

```python
from jsonpatchkit.pointer import get_pointer, resolve_pointer, find_pointer

doc = {"foo": ["bar", "baz"], "a/b": 1, "m~n": 8}

get_pointer(doc, "/foo/0")      # "bar"
get_pointer(doc, "/a~1b")       # 1
get_pointer(doc, "/missing")    # None
resolve_pointer(doc, "/nope")   # raises PointerError

numbers = doc["foo"]
find_pointer(doc, numbers)      # "/foo"
```

`find_pointer` matches the target by identity and returns `None` when it is
not inside the document. `encode_token` and `decode_token` convert a single
key to and from its `~0` / `~1` escaped form. Object keys are matched
without regard to ASCII case. `PointerError` is a `LookupError` and carries
the failing pointer in its `pointer` attribute.

## JSON Patch

```python
from jsonpatchkit.patch import apply_patches, generate_patches, PatchError

doc = {"foo": "bar"}
apply_patches(doc, [{"op": "add", "path": "/baz", "value": "qux"}])
# doc == {"foo": "bar", "baz": "qux"}

generate_patches({"a": 1}, {"a": 2, "b": 3})
# [{"op": "replace", "path": "/a", "value": 2},
#  {"op": "add", "path": "/b", "value": 3}]
```

`apply_patch` applies one operation and `apply_patches` a list of them, both
in place. The operations are `add`, `remove`, `replace`, `move`, `copy` and
`test`. A malformed patch (missing `op`, `path`, `value` or `from`, an
unknown operation, or nowhere to put the value) raises `PatchError`; a
failing `test` raises `PatchTestFailed`, a subclass of `PatchError`.
Operations applied before the failing one stay applied.

`add_patch(patches, op, path, value)` appends a single operation to a list;
`value` is optional and copied when given. `compare(a, b)` returns `True`
when two values are equal under the rules `test` uses: object keys match
without regard to ASCII case, and `true` and `false` are different kinds.

## JSON Merge Patch

```python
from jsonpatchkit.merge import merge_patch, generate_merge_patch

merge_patch({"a": "b", "b": "c"}, {"a": None})      # {"b": "c"}
generate_merge_patch({"a": "b"}, {"a": "c"})        # {"a": "c"}
```

`merge_patch` returns the merged result and leaves its `target` unchanged;
members it changes move to the end of the object. `generate_merge_patch`
returns `None` when two objects already hold the same members.

## Sorting objects

Comparison and patch generation walk object keys in case-insensitive order.
`sort_object` reorders a dict's keys that way in place, `sorted_items`
returns its `(key, value)` pairs in that order, and `key_order` is the sort
key they use.

## What it does not do

The package works on values that are already Python objects: it neither
parses nor prints JSON text (use `json.loads` and `json.dumps` for that),
and it has no command-line interface.